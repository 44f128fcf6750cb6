from dataclasses import dataclass
from typing import Any

from .debug import trace_probe
from .hasher import string_hasher
from .shared import format_key, printf, printf_err
from .value import (
    AllocationFailure,
    ApplyResult,
    Bucket,
    ConfigurationError,
    Directive,
    Free,
    Full,
    Hit,
    IterationCompleted,
    IteratorEarlyExit,
    Key,
    NotFound,
    Ok,
    PutResult,
    RemoveResult,
    Slot,
    SlotVisitor,
    as_key,
)


MAX_PROBE = 8

# largest power of two an unsigned 32-bit capacity can hold
MAX_CAPACITY = 2**31


_debug_trace_probes = False


def set_debug_trace_probes(b: bool):
    global _debug_trace_probes
    _debug_trace_probes = b


@dataclass
class Hashmap:
    """Open addressing map from byte-string keys to arbitrary values.

    Keys are borrowed: the map keeps a reference to the caller's key object
    and never copies it, so a bytearray key must not be mutated while its
    entry is in the map.
    """

    capacity: int
    count: int
    slots: tuple[Slot, ...]

    def locate(self, key: Key, length: int | None = None) -> Bucket:
        key, length = as_key(key, length)

        if self.count >= self.capacity:
            return Full()

        start = string_hasher(key, length, self.capacity)

        # an existing entry wins over a free slot earlier in the chain
        total_used = 0
        index = start
        for step in range(MAX_PROBE):
            slot = self.slots[index]
            if _debug_trace_probes:
                trace_probe("locate", key, length, step, index, slot)

            if slot.used:
                total_used += 1
                if check_if_match(slot, key, length):
                    return Hit(index)
            index = (index + 1) % self.capacity

        if total_used < MAX_PROBE:
            index = start
            for _ in range(MAX_PROBE):
                if not self.slots[index].used:
                    return Free(index)
                index = (index + 1) % self.capacity

        return Full()

    def put(self, key: Key, value: Any, length: int | None = None) -> PutResult:
        key, length = as_key(key, length)

        bucket = self.locate(key, length)
        while isinstance(bucket, Full):
            if isinstance(self.expand(), AllocationFailure):
                return AllocationFailure()
            bucket = self.locate(key, length)

        slot = self.slots[bucket.index]
        slot.data = value
        slot.key = key
        slot.key_len = length

        if not slot.used:
            slot.used = True
            self.count += 1

        return Ok()

    def get(self, key: Key, length: int | None = None) -> Any | NotFound:
        key, length = as_key(key, length)

        index = self._find("get", key, length)
        if index is None:
            return NotFound()

        return self.slots[index].data

    def remove(self, key: Key, length: int | None = None) -> RemoveResult:
        key, length = as_key(key, length)

        index = self._find("remove", key, length)
        if index is None:
            return NotFound()

        # no tombstone, lookups are bounded by MAX_PROBE rather than by empty slots
        self.slots[index].clear()
        self.count -= 1
        return Ok()

    def _find(self, op: str, key: Key, length: int) -> int | None:
        if self.count == 0:
            return None

        index = string_hasher(key, length, self.capacity)
        for step in range(MAX_PROBE):
            slot = self.slots[index]
            if _debug_trace_probes:
                trace_probe(op, key, length, step, index, slot)

            if slot.used and check_if_match(slot, key, length):
                return index
            index = (index + 1) % self.capacity

        return None

    def apply(self, fn: SlotVisitor, context: Any = None) -> ApplyResult:
        """Call fn(context, slot) on every occupied slot in index order.

        A return of -1 clears the slot, 0 moves on and anything else stops
        the walk. fn must not call back into this map.
        """
        for slot in self.slots:
            if not slot.used:
                continue

            match fn(context, slot):
                case Directive.REMOVE:
                    slot.clear()
                    self.count -= 1
                case Directive.CONTINUE:
                    pass
                case _:
                    return IteratorEarlyExit()

        return IterationCompleted()

    def expand(self) -> PutResult:
        new_map = create_hashmap(2 * self.capacity)
        if not isinstance(new_map, Hashmap):
            return AllocationFailure()

        if isinstance(self.apply(rehash_iterator, new_map), IteratorEarlyExit):
            return AllocationFailure()

        self.destroy()

        self.capacity = new_map.capacity
        self.count = new_map.count
        self.slots = new_map.slots
        return Ok()

    def destroy(self):
        self.slots = tuple()
        self.capacity = 0
        self.count = 0

    def destroy_with_ownership(self, fn: SlotVisitor) -> ApplyResult:
        result = self.apply(fn)
        if isinstance(result, IteratorEarlyExit):
            printf_err("Failed to deallocate hashmap entries\n")

        self.destroy()
        return result


def create_hashmap(capacity: int) -> Hashmap | ConfigurationError | AllocationFailure:
    if capacity <= 0 or (capacity & (capacity - 1)) != 0 or capacity > MAX_CAPACITY:
        return ConfigurationError(capacity)

    try:
        slots = tuple(Slot.empty() for _ in range(capacity))
    except MemoryError:
        return AllocationFailure()

    return Hashmap(capacity=capacity, count=0, slots=slots)


def check_if_match(slot: Slot, key: Key, length: int) -> bool:
    if slot.key is None or slot.key_len != length:
        return False
    return slot.key[:length] == key[:length]


def rehash_iterator(new_map: Hashmap, slot: Slot) -> int:
    assert slot.key is not None

    if isinstance(new_map.put(slot.key, slot.data, slot.key_len), AllocationFailure):
        return Directive.STOP

    # the entry now lives in new_map only
    return Directive.REMOVE


def log_free_iterator(context: Any, slot: Slot) -> int:
    printf(
        "{0:s} = {1!s} has been freed!\n", format_key(slot.key, slot.key_len), slot.data
    )
    return Directive.REMOVE
