from .shared import format_key, printf
from .value import Key, Slot


def dump_slots(slots: tuple[Slot, ...], name: str):
    printf("== {0:s} ==\n", name)

    for index, slot in enumerate(slots):
        dump_slot(index, slot)


def dump_slot(index: int, slot: Slot):
    printf("{0:04d} ", index)
    if not slot.used:
        printf("   -\n")
        return

    printf("{0:<16s} {1:3d} ", format_key(slot.key, slot.key_len), slot.key_len)
    printf("{0!r}\n", slot.data)


def trace_probe(op: str, key: Key, length: int, step: int, index: int, slot: Slot):
    printf("{0:<8s} '{1:s}' ", op, format_key(key, length))
    printf("step {0:d} -> {1:04d} ", step, index)
    if slot.used:
        printf("[{0:s}]\n", format_key(slot.key, slot.key_len))
    else:
        printf("[ ]\n")
