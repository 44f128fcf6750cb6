import sys
from typing import Any, NoReturn

from .debug import dump_slots
from .shared import printf, printf_err
from .symbols import (
    DataType,
    free_symbol_table,
    init_symbol_table,
    insert_proc,
    insert_var,
    lookup,
    show_symbol,
)
from .table import Hashmap, create_hashmap, log_free_iterator, set_debug_trace_probes
from .value import NotFound, Ok


_dump_tables = False


def fail(format: str, *args: Any) -> NoReturn:
    printf_err(format, *args)
    sys.exit(70)


def new_map() -> Hashmap:
    hashmap = create_hashmap(2)
    if not isinstance(hashmap, Hashmap):
        fail("Couldn't create the hashmap!\n")
    return hashmap


def put(hashmap: Hashmap, key: bytes, value: Any):
    if hashmap.put(key, value) != Ok():
        fail("Couldn't put element!\n")


def get(hashmap: Hashmap, key: bytes) -> Any:
    value = hashmap.get(key)
    if value == NotFound():
        fail("Couldn't find element!\n")
    return value


def run_basic():
    hashmap = new_map()

    put(hashmap, b"life", 42)
    put(hashmap, b"test", 69)
    put(hashmap, b"test2", 420)
    if _dump_tables:
        dump_slots(hashmap.slots, "basic")

    printf("Found element {0:d}\n", get(hashmap, b"life"))
    put(hashmap, b"life", 69)
    printf("Found element {0:d}\n", get(hashmap, b"life"))

    printf("Found element {0:d}\n", get(hashmap, b"test"))
    hashmap.remove(b"test")
    value = hashmap.get(b"test")
    if value != NotFound():
        fail("Could find element {0!r} after remove!\n", value)
    printf("Removed element test!\n")

    hashmap.destroy()


def run_ownership():
    hashmap = new_map()

    put(hashmap, b"life", "42 toalha")
    printf("Found element {0:s}\n", get(hashmap, b"life"))

    hashmap.destroy_with_ownership(log_free_iterator)


def run_symbol_table():
    table = init_symbol_table()

    if insert_var(table, "intVar", DataType.INTEGER, 4, 0) != Ok():
        fail("Couldn't insert intVar!\n")
    if insert_var(table, "floatVar", DataType.REAL, 3.14, 3) != Ok():
        fail("Couldn't insert floatVar!\n")
    if insert_proc(table, "proc", DataType.INTEGER, 0) != Ok():
        fail("Couldn't insert proc!\n")
    if _dump_tables:
        dump_slots(table.symbols.slots, "symbols")

    for name in ("intVar", "floatVar", "proc"):
        symbol = lookup(table, name)
        if symbol == NotFound():
            fail("Couldn't find symbol {0:s}!\n", name)
        show_symbol(symbol)

    free_symbol_table(table)


def run_demo():
    run_basic()
    run_ownership()
    run_symbol_table()


def main():
    global _dump_tables

    if len(sys.argv) == 2 and sys.argv[1] == "--trace":
        set_debug_trace_probes(True)
        _dump_tables = True
    elif len(sys.argv) != 1:
        printf("Usage: pyhashmap [--trace]\n")
        sys.exit(64)

    run_demo()
