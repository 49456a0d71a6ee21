"""playflow exception hierarchy."""

from __future__ import annotations

from playflow.error_codes import ErrorCode


def format_action_label(index: int, name: str | None) -> str:
    """Return ``Action at index <i>`` with the quoted name appended when known."""
    label = f"Action at index {int(index)}"
    if name:
        label = f'{label} "{name}"'
    return label


class PlayFlowError(Exception):
    """Base error for playflow."""

    error_code: ErrorCode | str | None = ErrorCode.UNKNOWN


class ConfigurationError(PlayFlowError):
    """Raised when configuration is invalid."""


class NoActionsError(PlayFlowError):
    """Raised when a pipeline without actions is invoked."""

    error_code = ErrorCode.NO_ACTIONS

    def __init__(self, message: str = "play() requires at least one action") -> None:
        super().__init__(message)


class InvalidInputError(PlayFlowError, TypeError):
    """Raised when the invocation input is not a plain record."""

    error_code = ErrorCode.INVALID_INPUT

    def __init__(self, shape: str) -> None:
        super().__init__(f"Input must be a plain object (got {shape})")
        self.shape = shape


class InvalidStepResultError(PlayFlowError, TypeError):
    """Raised when a non-terminal action returns something that cannot be merged."""

    error_code = ErrorCode.INVALID_STEP_RESULT

    def __init__(self, index: int, shape: str, *, action_name: str | None = None) -> None:
        super().__init__(
            f"{format_action_label(index, action_name)} must return a plain object or None (got {shape})"
        )
        self.index = int(index)
        self.action_name = action_name
        self.shape = shape


class ActionExecutionError(PlayFlowError):
    """Raised when an action fails; the original exception is kept as ``__cause__``."""

    def __init__(
        self,
        index: int,
        message: str,
        *,
        action_name: str | None = None,
        error_code: ErrorCode | str | None = ErrorCode.ACTION_FAILED,
    ) -> None:
        super().__init__(f"{format_action_label(index, action_name)} failed: {message}")
        self.index = int(index)
        self.action_name = action_name
        self.message = message
        self.error_code = error_code

    @property
    def original(self) -> BaseException | None:
        return self.__cause__
