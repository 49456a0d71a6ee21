"""Core data models for playflow."""

from playflow.models.run import PipelineRun, RunStatus

__all__ = [
    "PipelineRun",
    "RunStatus",
]
