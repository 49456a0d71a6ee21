"""Plain-record checks and context merging.

A plain record is a ``dict`` (or a read-only ``MappingProxyType`` view over
one) whose keys are all strings. Copies made here are shallow: only the top
level is insulated from later mutation of the caller's object.
"""

from __future__ import annotations

import builtins
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from playflow.exceptions import InvalidInputError, InvalidStepResultError
from playflow.pipeline.context import PipelineContext

_RECORD_TYPES = (dict, MappingProxyType)


def is_plain_record(value: Any) -> bool:
    if type(value) not in _RECORD_TYPES:
        return False
    return all(isinstance(key, str) for key in value)


def describe_shape(value: Any) -> str:
    """Name the runtime shape of ``value`` for error messages."""
    if value is None:
        return "None"
    cls = type(value)
    if cls in _RECORD_TYPES:
        return f"{cls.__name__} with non-string keys"
    if getattr(builtins, cls.__name__, None) is cls:
        return cls.__name__
    return f"{cls.__name__} instance"


def validate_input(value: Any) -> Mapping[str, Any]:
    if not is_plain_record(value):
        raise InvalidInputError(describe_shape(value))
    return value


def snapshot(value: Mapping[str, Any]) -> tuple[PipelineContext, Mapping[str, Any]]:
    """Return ``(ctx, input_snapshot)`` as two independent shallow copies."""
    return dict(value), MappingProxyType(dict(value))


def merge(
    ctx: PipelineContext,
    result: Any,
    *,
    index: int,
    name: str | None = None,
) -> PipelineContext:
    """Merge a non-terminal action result on top of ``ctx``.

    ``None`` leaves the context untouched; newer keys win on conflict.
    """
    if result is None:
        return ctx
    if not is_plain_record(result):
        raise InvalidStepResultError(index, describe_shape(result), action_name=name)
    return {**ctx, **result}


def is_stop(value: Any, stop_key: str | None) -> bool:
    if not stop_key or not is_plain_record(value):
        return False
    return bool(value.get(stop_key))


def strip_stop(value: Any, stop_key: str | None) -> Any:
    """Drop the stop key from any mapping result; other values pass as-is."""
    if not stop_key or not isinstance(value, Mapping) or stop_key not in value:
        return value
    return {key: item for key, item in value.items() if key != stop_key}
