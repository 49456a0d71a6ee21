from __future__ import annotations

import pytest

from playflow.config import PipelineSettings
from playflow.utils.logging_setup import reset_logging


@pytest.fixture()
def settings() -> PipelineSettings:
    return PipelineSettings(stop_key="stop", log_steps=True, max_message_chars=2000)


@pytest.fixture()
def clean_logging():
    reset_logging()
    yield
    reset_logging()
