from __future__ import annotations

import pytest

from playflow.error_codes import ErrorCode
from playflow.exceptions import ActionExecutionError, InvalidStepResultError
from playflow.models.run import PipelineRun, RunStatus
from playflow.pipeline.executor import play


class _Recorder:
    def __init__(self) -> None:
        self.updates: list[dict] = []

    async def __call__(self, run: PipelineRun) -> None:
        self.updates.append(run.to_dict())


@pytest.mark.asyncio
async def test_successful_run_reports_each_transition(settings) -> None:
    recorder = _Recorder()

    async def load(ctx, meta):  # noqa: ANN001, ARG001
        return {"a": 1}

    run = play(load, lambda ctx, meta: ctx["a"], name="demo", settings=settings, on_update=recorder)
    assert await run({}) == 1

    statuses = [(u["status"], u["index"]) for u in recorder.updates]
    assert statuses == [("running", 0), ("running", 1), ("succeeded", 1)]
    assert recorder.updates[0]["action_name"] == "load"
    final = recorder.updates[-1]
    assert final["pipeline"] == "demo"
    assert final["total"] == 2
    assert final["history"] == [0, 1]
    assert final["stopped_early"] is False
    assert final["duration_ms"] is not None
    assert final["completed_at"] is not None


@pytest.mark.asyncio
async def test_early_stop_is_recorded(settings) -> None:
    recorder = _Recorder()
    run = play(lambda ctx, meta: {"stop": True}, lambda ctx, meta: "never", settings=settings, on_update=recorder)
    assert await run({}) == {}
    final = recorder.updates[-1]
    assert final["status"] == RunStatus.SUCCEEDED.value
    assert final["stopped_early"] is True
    assert final["history"] == [0]


@pytest.mark.asyncio
async def test_failed_run_records_error(settings) -> None:
    recorder = _Recorder()

    async def middle(ctx, meta):  # noqa: ANN001, ARG001
        raise RuntimeError("boom")

    run = play(lambda ctx, meta: {}, middle, lambda ctx, meta: "never", settings=settings, on_update=recorder)
    with pytest.raises(ActionExecutionError):
        await run({})

    final = recorder.updates[-1]
    assert final["status"] == "failed"
    assert final["index"] == 1
    assert final["error_code"] == ErrorCode.ACTION_FAILED.value
    assert final["error_message"] == 'Action at index 1 "middle" failed: boom'


@pytest.mark.asyncio
async def test_rejected_result_records_error(settings) -> None:
    recorder = _Recorder()
    run = play(lambda ctx, meta: 5, lambda ctx, meta: "never", settings=settings, on_update=recorder)
    with pytest.raises(InvalidStepResultError):
        await run({})
    assert recorder.updates[-1]["error_code"] == ErrorCode.INVALID_STEP_RESULT.value


def test_run_state_machine_rejects_transitions_after_finish() -> None:
    run = PipelineRun(total=1)
    assert run.status == RunStatus.PENDING
    run.start_action(0, None)
    run.succeed()
    assert run.finished
    with pytest.raises(RuntimeError):
        run.start_action(1, None)
    with pytest.raises(RuntimeError):
        run.fail(ValueError("late"))
