# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from .applier import apply_change
from .session import ChangeSession
from .validity import (
    insert_target_is_valid,
    is_applicable,
    move_target_is_valid,
    old_item_is_current,
)

__all__ = (
    "ChangeSession",
    "apply_change",
    "insert_target_is_valid",
    "is_applicable",
    "move_target_is_valid",
    "old_item_is_current",
)
