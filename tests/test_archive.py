import struct
import zlib
from dataclasses import dataclass

import pytest

from midgarts.fileformat.des import decode_header
from midgarts.fileformat.grf.archive import EntryNotFoundError, load
from midgarts.fileformat.grf.entry import EntryHeader

CLIENT_TEXT = (
    "client client client client client client client client client client "
    "client client client client client"
)

LOREM_TEXT = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Sed venenatis bibendum "
    "venenatis. Aliquam quis velit urna. Suspendisse nec posuere sem. Donec risus quam, "
    "vulputate sed augue ultricies, dignissim hendrerit purus. Nulla euismod dolor enim, "
    "vel fermentum ex ultricies ac. Donec aliquet vehicula egestas. Sed accumsan velit ac "
    "mauris porta, id imperdiet purus aliquam. Phasellus et faucibus erat. Vestibulum ante "
    "ipsum primis in faucibus orci luctus et ultrices posuere cubilia curae; Pellentesque "
    "vel nisl efficitur, euismod augue eu, consequat dui. Maecenas vestibulum tortor purus, "
    "egestas posuere tortor imperdiet eget. Nulla sit amet placerat diam."
)

# Gap between encrypted blocks by number of digits of the entry size.
_CYCLES = {1: 1, 2: 1, 3: 4, 4: 5, 5: 14, 6: 15}

_SHUFFLE_PAIRS = bytes.fromhex("002b6c800168487760ffb9c0feeb")
_SHUFFLE = list(range(256))
for _a, _b in zip(_SHUFFLE_PAIRS[::2], _SHUFFLE_PAIRS[1::2]):
    _SHUFFLE[_a], _SHUFFLE[_b] = _b, _a


def _pad(data):
    return data + bytes(-len(data) % 8)


def _unshuffle(p):
    return bytes((p[3], p[4], p[5], p[0], p[1], p[6], p[2], _SHUFFLE[p[7]]))


def _encrypt_full(data, entry_length):
    cycle = _CYCLES[len(str(entry_length))]
    buf = bytearray(data)
    j = -1
    for i in range(len(buf) // 8):
        block = bytes(buf[i * 8:i * 8 + 8])
        if i < 20 or i % cycle == 0:
            buf[i * 8:i * 8 + 8] = decode_header(block)
            continue
        j += 1
        if j and j % 7 == 0:
            buf[i * 8:i * 8 + 8] = _unshuffle(block)
    return bytes(buf)


@dataclass
class _Item:
    name: bytes
    stored: bytes
    compressed: int
    aligned: int
    uncompressed: int
    flags: int


def _raw(name, payload, flags=0x01):
    return _Item(name, payload, len(payload), len(payload), len(payload), flags)


def _compressed(name, text):
    packed = zlib.compress(text)
    return _Item(name, packed, len(packed), len(packed), len(text), 0x01)


def _des_header(name, text):
    packed = zlib.compress(text)
    padded = _pad(packed)
    return _Item(name, decode_header(padded), len(packed), len(padded), len(text), 0x05)


def _des_full(name, text):
    packed = zlib.compress(text)
    padded = _pad(packed)
    return _Item(name, _encrypt_full(padded, len(packed)), len(packed), len(padded), len(text), 0x03)


def _build_grf(items, seed=0, version=0x200, signature=b"Master of Magic", table_offset=None):
    body = bytearray()
    table = bytearray()
    for item in items:
        offset = len(body)
        body += item.stored
        table += item.name + b"\x00"
        table += struct.pack(
            "<IIIBI", item.compressed, item.aligned, item.uncompressed, item.flags, offset
        )
    packed = zlib.compress(bytes(table))
    offset = len(body) if table_offset is None else table_offset
    header = struct.pack(
        "<15s15sIIII", signature, bytes(15), offset, seed, len(items) + seed + 7, version
    )
    return header + bytes(body) + struct.pack("<II", len(packed), len(table)) + packed


def _act_bytes():
    return (
        b"AC" + bytes((0, 2)) + struct.pack("<H", 1) + bytes(10)
        + struct.pack("<I", 1) + bytes(32) + struct.pack("<I", 0) + struct.pack("<i", -1)
        + struct.pack("<f", 4.0)
    )


def _spr_bytes():
    return (
        b"SP" + bytes((0, 2)) + struct.pack("<HH", 1, 0)
        + struct.pack("<HH", 2, 1) + bytes((1, 0)) + bytes(1024)
    )


def _items():
    client = CLIENT_TEXT.encode()
    return [
        _raw(b"raw", client),
        _compressed(b"compressed", client),
        _des_header(b"compressed-des-header", client),
        _des_full(b"compressed-des-full", client),
        _des_full(b"big-compressed-des-full", LOREM_TEXT.encode()),
        _raw(b"data\\Sprite\\Shadow.act", _act_bytes()),
        _raw(b"data\\Sprite\\Shadow.spr", _spr_bytes()),
        _raw(b"data\\folder", b"", flags=0x00),
    ]


@pytest.fixture
def grf_path(tmp_path):
    path = tmp_path / "with-files.grf"
    path.write_bytes(_build_grf(_items(), seed=3))
    return path


@pytest.fixture
def grf(grf_path):
    archive = load(grf_path)
    yield archive
    archive.close()


@pytest.mark.parametrize(
    "entry_name, expected",
    [
        ("raw", CLIENT_TEXT),
        ("compressed", CLIENT_TEXT),
        ("compressed-des-header", CLIENT_TEXT),
        ("compressed-des-full", CLIENT_TEXT),
        ("big-compressed-des-full", LOREM_TEXT),
    ],
)
def test_entry_contents(grf, entry_name, expected):
    entry = grf.get_entry(entry_name)
    assert entry.data.decode() == expected


def test_entry_headers(grf):
    items = {item.name.decode(): item for item in _items()}
    entries = grf.get_entries("")
    assert [e.name for e in entries] == [
        "raw",
        "compressed",
        "compressed-des-header",
        "compressed-des-full",
        "big-compressed-des-full",
    ]
    offset = 0
    for entry in entries:
        item = items[entry.name]
        assert entry.header == EntryHeader(
            item.compressed, item.aligned, item.uncompressed, item.flags, offset
        )
        offset += len(item.stored)


def test_entry_count_uses_seed(grf):
    assert grf.entry_count == len(_items())


def test_directory_entries_are_skipped_and_names_normalised(grf):
    assert "data" not in grf.entries
    assert [e.name for e in grf.get_entries("data/sprite")] == [
        "data/sprite/shadow.act",
        "data/sprite/shadow.spr",
    ]
    assert grf.get_entries("missing") == []


def test_tree_holds_sorted_directories(grf):
    visited = []
    grf.tree.traverse(grf.tree.root, lambda node: visited.append(node.value))
    assert visited == ["", "data/sprite"]


def test_get_entry_is_case_insensitive_and_cached(grf):
    first = grf.get_entry("DATA/Sprite/SHADOW.ACT")
    second = grf.get_entry("data/sprite/shadow.act")
    assert first is second
    assert first.data == _act_bytes()


def test_missing_directory_raises(grf):
    with pytest.raises(EntryNotFoundError):
        grf.get_entry("nowhere/file.txt")


def test_missing_entry_raises(grf):
    with pytest.raises(EntryNotFoundError):
        grf.get_entry("data/sprite/absent.act")


def test_get_action_and_sprite_files(grf):
    pair = grf.get_action_and_sprite_files("data/sprite/shadow")
    assert len(pair.act.actions) == 1
    assert pair.act.actions[0].delay == 100
    assert pair.spr.frames[0].width == 2
    assert pair.spr.frames[0].height == 1


def test_context_manager_closes_stream(grf_path):
    with load(grf_path) as archive:
        assert archive.get_entry("raw").data.decode() == CLIENT_TEXT
    with pytest.raises(ValueError):
        archive.get_entry("compressed")


def test_invalid_signature(tmp_path):
    path = tmp_path / "bad.grf"
    path.write_bytes(_build_grf(_items(), signature=b"Master of Music"))
    with pytest.raises(ValueError):
        load(path)


def test_unsupported_version(tmp_path):
    path = tmp_path / "old.grf"
    path.write_bytes(_build_grf(_items(), version=0x103))
    with pytest.raises(ValueError):
        load(path)


def test_invalid_table_offset(tmp_path):
    path = tmp_path / "offset.grf"
    path.write_bytes(_build_grf(_items(), table_offset=1_000_000))
    with pytest.raises(ValueError):
        load(path)


def test_truncated_header(tmp_path):
    path = tmp_path / "short.grf"
    path.write_bytes(b"Master of Magic")
    with pytest.raises(ValueError):
        load(path)


def test_truncated_entry_table(tmp_path):
    path = tmp_path / "count.grf"
    data = bytearray(_build_grf(_items()))
    # Claim more entries than the table holds.
    struct.pack_into("<I", data, 38, len(_items()) + 7 + 5)
    path.write_bytes(bytes(data))
    with pytest.raises(ValueError):
        load(path)