from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ErrorKind(str, Enum):
    SYNTAX = 'SYNTAX'
    RUNTIME = 'RUNTIME'
    TYPE = 'TYPE'
    RESOURCE = 'RESOURCE'


@dataclass(frozen=True)
class ErrorInfo:
    """Structured description of a failed run, as returned to callers."""
    message: str
    line: int = 0
    column: int = 0
    kind: ErrorKind = ErrorKind.RUNTIME

    def to_dict(self) -> Dict[str, Any]:
        return {
            'message': self.message,
            'line': self.line,
            'column': self.column,
            'kind': self.kind.value,
        }

    def __str__(self) -> str:
        return f"{self.kind.value} error at {self.line}:{self.column}: {self.message}"


class BrainrotError(Exception):
    """Exception type used to propagate BrainRot errors."""
    def __init__(self, err: ErrorInfo):
        super().__init__(f"BrainrotError: {err.kind.value}: {err.message}")
        self.err = err
