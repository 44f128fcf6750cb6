from dataclasses import dataclass
import enum
from typing import Any, Callable


Key = bytes | bytearray


@dataclass
class Slot:
    key: Key | None
    key_len: int
    used: bool
    data: Any

    @classmethod
    def empty(cls) -> "Slot":
        return Slot(key=None, key_len=0, used=False, data=None)

    def clear(self):
        self.key = None
        self.key_len = 0
        self.used = False
        self.data = None


# locate() outcomes


@dataclass(frozen=True)
class Hit:
    index: int


@dataclass(frozen=True)
class Free:
    index: int


@dataclass(frozen=True)
class Full:
    pass


Bucket = Hit | Free | Full


# operation outcomes


@dataclass(frozen=True)
class Ok:
    pass


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class ConfigurationError:
    capacity: int


@dataclass(frozen=True)
class AllocationFailure:
    pass


@dataclass(frozen=True)
class IterationCompleted:
    pass


@dataclass(frozen=True)
class IteratorEarlyExit:
    pass


PutResult = Ok | AllocationFailure
RemoveResult = Ok | NotFound
ApplyResult = IterationCompleted | IteratorEarlyExit


class Directive(int, enum.Enum):
    REMOVE = -1
    CONTINUE = 0
    STOP = 1


SlotVisitor = Callable[[Any, Slot], int]


def as_key(key: Any, length: int | None) -> tuple[Key, int]:
    if not isinstance(key, (bytes, bytearray)):
        raise Exception("not bytes", key)
    if length is None:
        return key, len(key)
    if not isinstance(length, int) or length < 0 or length > len(key):
        raise Exception("key length out of range", length)
    return key, length
