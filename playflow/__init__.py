"""playflow: run async actions in order over a shared, merged context.

Public surface::

    from playflow import play, Pipeline, Stop, Continue, named

    run = play(load_user, enrich, render)
    result = await run({"user_id": 7})
"""

from playflow.config import LoggingSettings, PipelineSettings, Settings
from playflow.error_codes import ErrorCode
from playflow.exceptions import (
    ActionExecutionError,
    ConfigurationError,
    InvalidInputError,
    InvalidStepResultError,
    NoActionsError,
    PlayFlowError,
)
from playflow.models.run import PipelineRun, RunStatus
from playflow.pipeline import (
    ActionMeta,
    Continue,
    NamedAction,
    Pipeline,
    Stop,
    is_plain_record,
    named,
    play,
)

__all__ = [
    "ActionExecutionError",
    "ActionMeta",
    "ConfigurationError",
    "Continue",
    "ErrorCode",
    "InvalidInputError",
    "InvalidStepResultError",
    "LoggingSettings",
    "NamedAction",
    "NoActionsError",
    "Pipeline",
    "PipelineRun",
    "PipelineSettings",
    "PlayFlowError",
    "RunStatus",
    "Settings",
    "Stop",
    "is_plain_record",
    "named",
    "play",
]
