"""Failure normalization and attribution for actions."""

from __future__ import annotations

import functools
import json
from collections.abc import Mapping
from typing import Any

from playflow.exceptions import ActionExecutionError

_STRUCTURED = (Mapping, list, tuple, set, frozenset)

DEFAULT_MAX_MESSAGE_CHARS = 2000


def action_name(action: Any) -> str | None:
    """Return a display name for ``action``; ``None`` means anonymous."""
    explicit = getattr(action, "name", None)
    if isinstance(explicit, str) and explicit.strip():
        return explicit.strip()
    if isinstance(action, functools.partial):
        return action_name(action.func)
    name = getattr(action, "__name__", None)
    if isinstance(name, str) and name and name != "<lambda>":
        return name
    return None


def _serialize(value: Any, max_chars: int) -> str:
    try:
        text = json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        # circular or unserializable payloads
        text = repr(value)
    if len(text) > max_chars:
        text = text[: max(0, max_chars - 3)] + "..."
    return text


def _text_of(exc: BaseException) -> str:
    for render in (str, repr):
        try:
            return render(exc)
        except Exception:
            continue
    return type(exc).__name__


def normalize(thrown: Any, *, max_chars: int = DEFAULT_MAX_MESSAGE_CHARS) -> str:
    """Turn whatever an action failed with into a one-line message.

    Exceptions keep their own text; a single structured argument (dict, list)
    is serialized to JSON, falling back to ``repr``. Exceptions without any
    text are described by their class name.
    """
    if isinstance(thrown, BaseException):
        args = thrown.args
        if len(args) == 1 and isinstance(args[0], _STRUCTURED):
            return _serialize(args[0], max_chars)
        text = _text_of(thrown)
        return text if text.strip() else type(thrown).__name__
    if isinstance(thrown, str):
        return thrown
    return _serialize(thrown, max_chars)


def annotate(
    exc: BaseException,
    index: int,
    name: str | None = None,
    *,
    max_chars: int = DEFAULT_MAX_MESSAGE_CHARS,
) -> ActionExecutionError:
    """Wrap ``exc`` as the single error reported for the failing action.

    The original exception becomes ``__cause__`` and its traceback is carried
    over, so the first frames point at the original raise site.
    """
    error = ActionExecutionError(index, normalize(exc, max_chars=max_chars), action_name=name)
    error.__cause__ = exc
    if exc.__traceback__ is not None:
        error = error.with_traceback(exc.__traceback__)
    return error
