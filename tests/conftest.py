# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass

import pytest

from keyedgroup import Group


@dataclass
class Record:
    """A minimal identifiable record, the kind of value a Group holds."""

    id: str
    score: int = 0


@pytest.fixture
def abc_group():
    """Group with entries ('a', 1), ('b', 2), ('c', 3)."""
    return Group([("a", 1), ("b", 2), ("c", 3)])


@pytest.fixture
def empty_group():
    return Group()


@pytest.fixture
def records():
    """Five records with scores 0..4."""
    return [Record(id=f"r{i}", score=i) for i in range(5)]


@pytest.fixture
def record_group(records):
    return Group.from_values(records)
