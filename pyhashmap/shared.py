from sys import stderr
from typing import Any


def printf(format: str, *args: Any):
    print(format.format(*args), end="")


def printf_err(format: str, *args: Any):
    print(format.format(*args), end="", file=stderr)


def format_key(key: bytes | bytearray | None, length: int) -> str:
    if key is None:
        return ""
    return bytes(key[:length]).decode("utf-8", errors="backslashreplace")
