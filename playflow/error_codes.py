"""Canonical error codes attached to pipeline failures."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN = "UNKNOWN"

    NO_ACTIONS = "NO_ACTIONS"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_STEP_RESULT = "INVALID_STEP_RESULT"
    ACTION_FAILED = "ACTION_FAILED"
