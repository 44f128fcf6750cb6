"""Key hashing: CRC-32 (Castagnoli), Jenkins' integer mix, Knuth's multiplier.

Bucket indices must agree bit for bit with every other implementation of this
map, so all arithmetic is done modulo 2**32.
"""

from .value import Key

_UINT32_MASK = 0xFFFFFFFF

CRC32_POLYNOMIAL = 0x82F63B78  # reversed Castagnoli (iSCSI)
KNUTH_MULTIPLIER = 2654435761


def _make_crc32_table() -> tuple[int, ...]:
    table = []
    for n in range(256):
        crc = n
        for _ in range(8):
            if crc & 1:
                crc = (crc >> 1) ^ CRC32_POLYNOMIAL
            else:
                crc >>= 1
        table.append(crc)
    return tuple(table)


CRC32_TABLE = _make_crc32_table()

assert CRC32_TABLE[:4] == (0x00000000, 0xF26B8303, 0xE13B70F7, 0x1350F3F4)


def crc32(key: Key, length: int) -> int:
    # register starts at 0 and there is no final xor
    crc = 0
    for i in range(length):
        crc = CRC32_TABLE[(crc ^ key[i]) & 0xFF] ^ (crc >> 8)
    return crc


def jenkins_mix(key: int) -> int:
    key = (key + (key << 12)) & _UINT32_MASK
    key ^= key >> 22
    key = (key + (key << 4)) & _UINT32_MASK
    key ^= key >> 9
    key = (key + (key << 10)) & _UINT32_MASK
    key ^= key >> 2
    key = (key + (key << 7)) & _UINT32_MASK
    key ^= key >> 12
    return key


def knuth_scramble(key: int) -> int:
    return ((key >> 3) * KNUTH_MULTIPLIER) & _UINT32_MASK


def hash_key(key: Key, length: int) -> int:
    return knuth_scramble(jenkins_mix(crc32(key, length)))


def string_hasher(key: Key, length: int, capacity: int) -> int:
    return hash_key(key, length) % capacity
