# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("keyedgroup")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"
