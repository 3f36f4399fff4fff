from typing import Dict

from brainrot.errors import BrainrotError, ErrorInfo, ErrorKind
from brainrot.types import Value


class Environment:
    """The single flat variable store of a run.

    There is no nesting: declaring a name that already exists overwrites
    it. Function calls take a snapshot of the whole store before binding
    parameters and put it back wholesale when the call finishes.
    """
    def __init__(self):
        self.values: Dict[str, Value] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def get(self, name: str, line: int = 0, column: int = 0) -> Value:
        if name in self.values:
            return self.values[name]
        raise BrainrotError(ErrorInfo(f"undefined variable '{name}'", line, column, ErrorKind.RUNTIME))

    def declare(self, name: str, value: Value):
        self.values[name] = value

    def snapshot(self) -> Dict[str, Value]:
        return dict(self.values)

    def restore(self, snapshot: Dict[str, Value]):
        self.values = snapshot
