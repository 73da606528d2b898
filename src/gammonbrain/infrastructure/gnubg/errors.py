from __future__ import annotations


class EngineError(RuntimeError):
    """Base class for failures talking to GNU Backgammon."""

    code: str = "engine_error"


class EngineUnavailableError(EngineError):
    code = "engine_unavailable"

    def __init__(self, message: str, instructions: str | None = None) -> None:
        super().__init__(message)
        self.instructions = instructions


class HintParseError(EngineError):
    code = "hint_parse_error"

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class EngineExecutionError(EngineError):
    code = "engine_execution_error"

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail


class EngineTimeoutError(EngineError, TimeoutError):
    code = "engine_timeout"

    def __init__(self, message: str, timeout: float | None = None) -> None:
        super().__init__(message)
        self.timeout = timeout


__all__ = [
    "EngineError",
    "EngineExecutionError",
    "EngineTimeoutError",
    "EngineUnavailableError",
    "HintParseError",
]
