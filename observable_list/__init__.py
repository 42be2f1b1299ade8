# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging

from ._errors import (
    DrainLimitExceededError,
    ExecutionError,
    IndexOutOfRangeError,
    ObservableListError,
    TypeMismatchError,
    ValidationError,
)
from ._sentinel import Unset, UnsetType, is_unset, not_unset
from .adapter import UntypedList
from .broadcaster import Broadcaster
from .change import Change, ChangeAction
from .config import ListSettings, settings
from .events import ItemUpdatedEvent, SizeChangedEvent
from .observable_list import ObservableList
from .version import __version__

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

__all__ = (
    "__version__",
    "Broadcaster",
    "Change",
    "ChangeAction",
    "DrainLimitExceededError",
    "ExecutionError",
    "IndexOutOfRangeError",
    "ItemUpdatedEvent",
    "ListSettings",
    "ObservableList",
    "ObservableListError",
    "SizeChangedEvent",
    "TypeMismatchError",
    "Unset",
    "UnsetType",
    "UntypedList",
    "ValidationError",
    "is_unset",
    "logger",
    "not_unset",
    "settings",
)
