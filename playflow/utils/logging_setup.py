"""Logging bootstrap for the ``playflow`` logger tree.

Only handlers installed here are tracked and replaced; handlers the host
application attaches to ``playflow`` loggers are left alone.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from playflow.config import Settings

_ROOT_LOGGER = "playflow"
_STEP_LOGGER = "playflow.pipeline.executor"
_INSTALLED_ATTR = "_playflow_handlers"


def _build_handlers(settings: Settings, level: int) -> list[logging.Handler]:
    cfg = settings.logging
    handlers: list[logging.Handler] = []
    if cfg.console:
        handlers.append(logging.StreamHandler())
    if cfg.file:
        file_path = Path(str(cfg.file))
        if not file_path.is_absolute():
            file_path = Path(settings.log_dir) / file_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                file_path,
                maxBytes=int(cfg.max_bytes),
                backupCount=int(cfg.backup_count),
                encoding="utf-8",
            )
        )

    formatter = logging.Formatter(fmt=str(cfg.format), datefmt=str(cfg.datefmt))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def _detach(logger: logging.Logger) -> None:
    for handler in getattr(logger, _INSTALLED_ATTR, ()):
        logger.removeHandler(handler)
        handler.close()
    if hasattr(logger, _INSTALLED_ATTR):
        delattr(logger, _INSTALLED_ATTR)


def setup_logging(settings: Settings, *, force: bool = False) -> logging.Logger:
    """Attach console/file handlers to the ``playflow`` logger and return it.

    A second call is a no-op unless ``force`` is set. With
    ``settings.pipeline.log_steps`` off, the executor logger is held at INFO
    so per-action DEBUG lines stay quiet even when the tree runs at DEBUG.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    if hasattr(logger, _INSTALLED_ATTR) and not force:
        return logger
    _detach(logger)

    level = logging.getLevelName(settings.logging.level)
    handlers = _build_handlers(settings, level)
    for handler in handlers:
        logger.addHandler(handler)
    setattr(logger, _INSTALLED_ATTR, tuple(handlers))
    logger.setLevel(level)
    logger.propagate = bool(settings.logging.propagate)

    step_level = logging.NOTSET if settings.pipeline.log_steps else max(level, logging.INFO)
    logging.getLogger(_STEP_LOGGER).setLevel(step_level)
    return logger


def reset_logging() -> None:
    """Undo :func:`setup_logging` so it can run again."""
    logger = logging.getLogger(_ROOT_LOGGER)
    _detach(logger)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    logging.getLogger(_STEP_LOGGER).setLevel(logging.NOTSET)
