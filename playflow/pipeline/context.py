"""Pipeline context typing.

Actions share a plain dict context. Each action receives the current context
and an :class:`ActionMeta` holding the read-only input snapshot of the run.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from playflow.models.run import PipelineRun

PipelineContext: TypeAlias = dict[str, Any]


@dataclass(frozen=True)
class ActionMeta:
    """Second argument passed to every action.

    ``input`` is the same object for every action of one invocation. The
    snapshot is shallow: nested values are shared with the caller's input.
    """

    input: Mapping[str, Any]


class Action(Protocol):
    def __call__(self, context: PipelineContext, meta: ActionMeta) -> Any: ...


RunUpdateHook = Callable[[PipelineRun], Awaitable[None]]
