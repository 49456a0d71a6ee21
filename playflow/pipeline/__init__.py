"""Sequential pipeline execution."""

from playflow.pipeline.context import Action, ActionMeta, PipelineContext, RunUpdateHook
from playflow.pipeline.executor import NamedAction, Pipeline, named, play
from playflow.pipeline.records import is_plain_record
from playflow.pipeline.signals import Continue, Stop, StepSignal

__all__ = [
    "Action",
    "ActionMeta",
    "Continue",
    "NamedAction",
    "Pipeline",
    "PipelineContext",
    "RunUpdateHook",
    "Stop",
    "StepSignal",
    "is_plain_record",
    "named",
    "play",
]
