# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging

from ._errors import GroupError, InvalidArgumentError
from ._sentinel import Undefined, UndefinedType, is_sentinel, not_sentinel
from .config import GroupSettings, settings
from .group import Group
from .version import __version__

logger = logging.getLogger(__name__)
logger.setLevel(settings.log_level)


__all__ = (
    "__version__",
    "Group",
    "GroupError",
    "GroupSettings",
    "InvalidArgumentError",
    "Undefined",
    "UndefinedType",
    "is_sentinel",
    "logger",
    "not_sentinel",
    "settings",
)
