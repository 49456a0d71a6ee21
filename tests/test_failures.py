from __future__ import annotations

import functools
import traceback

from playflow.error_codes import ErrorCode
from playflow.exceptions import ActionExecutionError
from playflow.pipeline.executor import named
from playflow.pipeline.failures import action_name, annotate, normalize


async def fetch_user(ctx, meta):  # noqa: ANN001, ARG001
    return {}


class _Loader:
    name = "loader"

    async def __call__(self, ctx, meta):  # noqa: ANN001, ARG002
        return {}


def test_action_name_resolution() -> None:
    assert action_name(fetch_user) == "fetch_user"
    assert action_name(lambda ctx, meta: None) is None
    assert action_name(_Loader()) == "loader"
    assert action_name(functools.partial(fetch_user)) == "fetch_user"
    assert action_name(named("render", lambda ctx, meta: "ok")) == "render"
    assert action_name(object()) is None


def test_normalize_keeps_exception_text() -> None:
    assert normalize(RuntimeError("boom")) == "boom"
    assert normalize("boom-str") == "boom-str"


def test_normalize_exception_without_text_uses_class_name() -> None:
    assert normalize(ValueError()) == "ValueError"


def test_normalize_serializes_structured_payloads() -> None:
    assert normalize(RuntimeError({"msg": "nope"})) == '{"msg": "nope"}'
    assert normalize({"msg": "nope"}) == '{"msg": "nope"}'
    assert normalize(42) == "42"


def test_normalize_falls_back_to_repr_for_circular_payloads() -> None:
    payload: dict = {}
    payload["self"] = payload
    assert normalize(RuntimeError(payload)) == "{'self': {...}}"

    marker = object()
    assert normalize(marker) == repr(marker)


def test_normalize_truncates_long_payloads() -> None:
    text = normalize(list(range(100)), max_chars=16)
    assert len(text) == 16
    assert text.endswith("...")


def test_annotate_builds_single_error_with_original_traceback() -> None:
    def middle() -> None:
        raise ValueError("boom")

    try:
        middle()
    except ValueError as exc:
        original = exc
        error = annotate(exc, 1, "middle")

    assert isinstance(error, ActionExecutionError)
    assert str(error) == 'Action at index 1 "middle" failed: boom'
    assert error.message == "boom"
    assert error.index == 1
    assert error.action_name == "middle"
    assert error.error_code == ErrorCode.ACTION_FAILED
    assert error.original is original
    frames = traceback.extract_tb(error.__traceback__)
    assert any(frame.name == "middle" for frame in frames)


def test_annotate_anonymous_action_omits_name() -> None:
    error = annotate(RuntimeError("fail"), 0, None)
    assert str(error) == "Action at index 0 failed: fail"
    assert error.action_name is None


def test_normalize_survives_broken_str() -> None:
    class Weird(Exception):
        def __str__(self) -> str:
            raise RuntimeError("no str")

    class Weirder(Weird):
        def __repr__(self) -> str:
            raise RuntimeError("no repr")

    assert normalize(Weird()) == "Weird()"
    assert normalize(Weirder()) == "Weirder"
