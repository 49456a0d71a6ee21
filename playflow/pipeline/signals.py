"""Explicit control values an action may return instead of a stop key."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Continue:
    """Merge ``record`` into the context and run the next action.

    ``Continue()`` is a pass-through. On the last action the record itself is
    the pipeline result.
    """

    record: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class Stop:
    """End the run now; ``value`` becomes the pipeline result."""

    value: Any = None


StepSignal = Continue | Stop
