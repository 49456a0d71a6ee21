"""Utility helpers."""

from playflow.utils.logging_setup import reset_logging, setup_logging

__all__ = [
    "reset_logging",
    "setup_logging",
]
