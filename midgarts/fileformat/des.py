"""The reduced DES variant used to obfuscate GRF archive entries."""

from __future__ import annotations

_HEADER_BLOCKS = 20

_MASK = tuple(0x80 >> bit for bit in range(8))


def _initial_permutation() -> tuple[int, ...]:
    # Even source bits first (58, 60, 62, 64), then odd ones (57, 59, 61, 63),
    # each row walking down by one byte.
    row_starts = (58, 60, 62, 64, 57, 59, 61, 63)
    return tuple(start - 8 * column for start in row_starts for column in range(8))


def _inverse(permutation: tuple[int, ...]) -> tuple[int, ...]:
    inverse = [0] * len(permutation)
    for target, source in enumerate(permutation, start=1):
        inverse[source - 1] = target
    return tuple(inverse)


_INITIAL_PERMUTATION = _initial_permutation()
_FINAL_PERMUTATION = _inverse(_INITIAL_PERMUTATION)

_TRANSPOSITION = tuple(
    bytes.fromhex("1007141 51d0c1c11010f171a05121f0a0208180e201b0309130d1e06160b0419".replace(" ", ""))
)

_SUBSTITUTION_BOXES = tuple(
    bytes.fromhex(box)
    for box in (
        "ef0341fdd8741e4726effb22b3d8841e39aca76062c1cdba5c969059053b7a85"
        "40fd1ec8e78a8b21da43649f2d14b172f55bc8b69c3776ec39a0a305526e0fd9",
        "a7dd0d789e0be3956036364ff9605aa31124d287c85275ecbbc14cba24fe8f19"
        "da1366af49d090068c6afb91378d0d78bf4911f423e5ce3b55bca257e82274ce",
        "2ceac1bf4a241fc27947a27cb6d9681580565d0133fdf4aede30079be5839b68"
        "49b42e831fc2b57ca219d8e57c2f83daf76b90fec4015a9761a63d400b58e63d",
        "4dd1b20f28bde478f64a0f938b17d1a43aecc93593567ecb5520a0fe6c891762"
        "17624bb1b4ded187c9143c4a7ea8e27da09ff65c6a098df00fe35325953628cb",
    )
)

_SHUFFLE_PAIRS = bytes.fromhex("002b6c800168487760ffb9c0feeb")


def _build_shuffle_table() -> bytes:
    table = bytearray(range(256))
    for a, b in zip(_SHUFFLE_PAIRS[::2], _SHUFFLE_PAIRS[1::2]):
        table[a] = b
        table[b] = a
    return bytes(table)


_SHUFFLE_TABLE = _build_shuffle_table()


def _permute(block: bytes, table: tuple[int, ...]) -> bytearray:
    out = bytearray(8)
    for i, position in enumerate(table):
        j = position - 1
        if block[(j >> 3) & 7] & _MASK[j & 7]:
            out[(i >> 3) & 7] |= _MASK[i & 7]
    return out


def _expansion(block: bytes) -> bytearray:
    b4, b5, b6, b7 = block[4], block[5], block[6], block[7]
    return bytearray((
        ((b7 << 5) | (b4 >> 3)) & 0x3F,
        ((b4 << 1) | (b5 >> 7)) & 0x3F,
        ((b4 << 5) | (b5 >> 3)) & 0x3F,
        ((b5 << 1) | (b6 >> 7)) & 0x3F,
        ((b5 << 5) | (b6 >> 3)) & 0x3F,
        ((b6 << 1) | (b7 >> 7)) & 0x3F,
        ((b6 << 5) | (b7 >> 3)) & 0x3F,
        ((b7 << 1) | (b4 >> 7)) & 0x3F,
    ))


def _substitution(block: bytes) -> bytearray:
    out = bytearray(8)
    for i, box in enumerate(_SUBSTITUTION_BOXES):
        out[i] = (box[block[i * 2]] & 0xF0) | (box[block[i * 2 + 1]] & 0x0F)
    return out


def _transposition(block: bytes) -> bytearray:
    out = bytearray(8)
    for i, position in enumerate(_TRANSPOSITION):
        j = position - 1
        if block[j >> 3] & _MASK[j & 7]:
            out[(i >> 3) + 4] |= _MASK[i & 7]
    return out


def _round(block: bytearray) -> None:
    mixed = _transposition(_substitution(_expansion(block)))
    for i in range(4):
        block[i] ^= mixed[i + 4]


def _decrypt_block(buf: bytearray, offset: int) -> None:
    block = _permute(buf[offset:offset + 8], _INITIAL_PERMUTATION)
    _round(block)
    buf[offset:offset + 8] = _permute(block, _FINAL_PERMUTATION)


def _shuffle_block(buf: bytearray, offset: int) -> None:
    b = buf[offset:offset + 8]
    buf[offset:offset + 8] = bytes((b[3], b[4], b[6], b[0], b[1], b[2], b[5], _SHUFFLE_TABLE[b[7]]))


def _cycle_for(entry_length: int) -> int:
    digits = len(str(entry_length))
    if digits < 3:
        return 1
    if digits < 5:
        return digits + 1
    if digits < 7:
        return digits + 9
    return digits + 15


def decode_full(data: bytes, length: int, entry_length: int) -> bytes:
    """Undo full entry encryption over the first ``length`` bytes of ``data``.

    ``entry_length`` is the compressed size of the entry; its number of
    decimal digits selects how often blocks past the header are encrypted.
    """
    buf = bytearray(data)
    count = length >> 3
    if count * 8 > len(buf):
        raise ValueError(f"length {length} exceeds data size {len(buf)}")

    cycle = _cycle_for(entry_length)

    for i in range(min(_HEADER_BLOCKS, count)):
        _decrypt_block(buf, i * 8)

    j = -1
    for i in range(_HEADER_BLOCKS, count):
        if i % cycle == 0:
            _decrypt_block(buf, i * 8)
            continue
        j += 1
        if j != 0 and j % 7 == 0:
            _shuffle_block(buf, i * 8)

    return bytes(buf)


def decode_header(data: bytes) -> bytes:
    """Undo header-only encryption: the first 20 blocks are decrypted."""
    buf = bytearray(data)
    count = len(buf) >> 3
    for i in range(min(_HEADER_BLOCKS, count)):
        _decrypt_block(buf, i * 8)
    return bytes(buf)