"""Pipeline executor."""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Awaitable
from typing import Any

from playflow.config import PipelineSettings
from playflow.exceptions import InvalidStepResultError, NoActionsError, PlayFlowError
from playflow.models.run import PipelineRun
from playflow.pipeline import records
from playflow.pipeline.context import Action, ActionMeta, PipelineContext, RunUpdateHook
from playflow.pipeline.failures import action_name, annotate
from playflow.pipeline.signals import Continue, Stop

logger = logging.getLogger(__name__)

_MISSING: Any = object()


class NamedAction:
    """Action wrapper that gives an anonymous callable a name for error reports."""

    __slots__ = ("action", "name")

    def __init__(self, name: str, action: Action) -> None:
        self.name = str(name)
        self.action = action

    def __call__(self, context: PipelineContext, meta: ActionMeta) -> Any:
        return self.action(context, meta)

    def __repr__(self) -> str:
        return f"NamedAction({self.name!r})"


def named(name: str, action: Action) -> NamedAction:
    return NamedAction(name, action)


async def _raise(error: BaseException) -> Any:
    raise error


class Pipeline:
    """Ordered chain of actions run one after another over a shared context.

    Every non-terminal action receives the current context and an
    :class:`ActionMeta`, and returns either ``None`` (pass-through), a plain
    record that is shallow-merged on top of the context, or a
    :class:`Continue` / :class:`Stop` signal. A truthy stop key in a returned
    record ends the run early. The last action's result is returned as-is,
    minus the stop key.

    The action tuple is never mutated; :meth:`then` and ``+`` build new
    pipelines. Concurrent invocations share nothing but that tuple.
    """

    def __init__(
        self,
        *actions: Action,
        settings: PipelineSettings | None = None,
        name: str | None = None,
        on_update: RunUpdateHook | None = None,
    ) -> None:
        self._actions: tuple[Action, ...] = tuple(actions)
        self.settings = settings if settings is not None else PipelineSettings()
        self.name = name
        self._on_update = on_update

    @property
    def actions(self) -> tuple[Action, ...]:
        return self._actions

    def __len__(self) -> int:
        return len(self._actions)

    def __repr__(self) -> str:
        names = [action_name(a) or "<anonymous>" for a in self._actions]
        if self.name:
            return f"Pipeline(name={self.name!r}, actions={names})"
        return f"Pipeline(actions={names})"

    def then(self, *actions: Action) -> "Pipeline":
        """Return a new pipeline with ``actions`` appended."""
        return Pipeline(
            *self._actions,
            *actions,
            settings=self.settings,
            name=self.name,
            on_update=self._on_update,
        )

    def __add__(self, other: object) -> "Pipeline":
        if not isinstance(other, Pipeline):
            return NotImplemented
        return Pipeline(
            *self._actions,
            *other.actions,
            settings=self.settings,
            on_update=self._on_update,
        )

    def __call__(self, input: Any = _MISSING, meta: ActionMeta | None = None) -> Awaitable[Any]:  # noqa: ARG002
        # `meta` is accepted so a pipeline can be nested as an action of another.
        return self.invoke(input)

    def invoke(self, input: Any = _MISSING) -> Awaitable[Any]:
        """Start a run over ``input`` and return an awaitable of its result.

        The input is validated and copied right here, before the awaitable is
        scheduled, so later mutation of the caller's dict is never observed.
        Validation failures are raised when the awaitable is awaited.
        """
        if not self._actions:
            return _raise(NoActionsError())
        if input is _MISSING:
            input = {}
        try:
            ctx, snapshot = records.snapshot(records.validate_input(input))
        except PlayFlowError as exc:
            return _raise(exc)
        return self._run(ctx, ActionMeta(input=snapshot))

    async def _notify(self, run: PipelineRun) -> None:
        # Hook failures never change the outcome of the run.
        if self._on_update is None:
            return
        try:
            await self._on_update(run)
        except Exception:
            logger.exception(
                "run update hook failed (pipeline=%s, status=%s, index=%s)",
                self.name,
                run.status.value,
                run.index,
            )

    async def _finish(self, run: PipelineRun, value: Any, *, stopped_early: bool) -> Any:
        run.succeed(stopped_early=stopped_early)
        await self._notify(run)
        return records.strip_stop(value, self.settings.stop_key)

    async def _run(self, ctx: PipelineContext, meta: ActionMeta) -> Any:
        run = PipelineRun(total=len(self._actions), pipeline=self.name)
        stop_key = self.settings.stop_key
        log_steps = bool(self.settings.log_steps)
        last = len(self._actions) - 1

        for index, action in enumerate(self._actions):
            name = action_name(action)
            run.start_action(index, name)
            await self._notify(run)
            if log_steps:
                logger.debug("action start (pipeline=%s, index=%d, name=%s)", self.name, index, name)

            started = time.monotonic()
            try:
                result = action(ctx, meta)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as exc:
                error = annotate(exc, index, name, max_chars=int(self.settings.max_message_chars))
                logger.warning(
                    "action failed (pipeline=%s, index=%d, name=%s): %s",
                    self.name,
                    index,
                    name,
                    error.message,
                )
                run.fail(error)
                await self._notify(run)
                raise error from exc

            if log_steps:
                logger.debug(
                    "action done (pipeline=%s, index=%d, name=%s, duration_ms=%d)",
                    self.name,
                    index,
                    name,
                    int((time.monotonic() - started) * 1000),
                )

            if isinstance(result, Stop):
                if index < last:
                    logger.info(
                        "pipeline stopped early (pipeline=%s, index=%d, skipped=%d)",
                        self.name,
                        index,
                        last - index,
                    )
                return await self._finish(run, result.value, stopped_early=index < last)
            if isinstance(result, Continue):
                result = result.record

            if index == last:
                return await self._finish(run, result, stopped_early=False)

            try:
                ctx = records.merge(ctx, result, index=index, name=name)
            except InvalidStepResultError as exc:
                logger.warning("action result rejected (pipeline=%s): %s", self.name, exc)
                run.fail(exc)
                await self._notify(run)
                raise

            if records.is_stop(result, stop_key):
                logger.info(
                    "pipeline stopped early (pipeline=%s, index=%d, skipped=%d)",
                    self.name,
                    index,
                    last - index,
                )
                return await self._finish(run, result, stopped_early=True)

        # The loop always returns on the last index.
        raise RuntimeError("unreachable")


def play(
    *actions: Action,
    settings: PipelineSettings | None = None,
    name: str | None = None,
    on_update: RunUpdateHook | None = None,
) -> Pipeline:
    """Build a :class:`Pipeline` from ``actions``."""
    return Pipeline(*actions, settings=settings, name=name, on_update=on_update)


__all__ = [
    "NamedAction",
    "Pipeline",
    "named",
    "play",
]
