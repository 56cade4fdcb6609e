import io

from midgarts.bytesutil import decode_windows1252, read_string, skip_bytes


def test_skip_bytes_advances_position():
    stream = io.BytesIO(b"0123456789")
    skip_bytes(stream, 4)
    assert stream.read(2) == b"45"


def test_skip_bytes_past_end_stops_at_end():
    stream = io.BytesIO(b"abc")
    skip_bytes(stream, 10)
    assert stream.tell() == 3
    assert stream.read() == b""


def test_read_string_stops_at_nul_and_consumes_field():
    stream = io.BytesIO(b"abc\x00xyz\x00\x00\x00rest")
    assert read_string(stream, 10) == "abc"
    assert stream.read() == b"rest"


def test_read_string_without_nul_returns_whole_field():
    stream = io.BytesIO(b"texture.bmp")
    assert read_string(stream, 7) == "texture"


def test_read_string_short_read_returns_empty():
    stream = io.BytesIO(b"ab")
    assert read_string(stream, 5) == ""


def test_read_string_decodes_windows1252():
    raw = bytes([0xC0, 0xCE, 0xB0, 0xA3, 0xC1, 0xB7]) + b"\x00\x00"
    assert read_string(io.BytesIO(raw), len(raw)) == "ÀÎ°£Á·"


def test_decode_windows1252_folder_name():
    assert decode_windows1252(bytes([0xB8, 0xF6, 0xC5, 0xEB])) == "¸öÅë"


def test_decode_windows1252_ascii_round_trip():
    text = "data/sprite/shadow.act"
    assert decode_windows1252(text.encode("ascii")) == text


def test_decode_windows1252_undefined_bytes_map_to_controls():
    assert decode_windows1252(bytes([0x81, 0x8D, 0x8F, 0x90, 0x9D])) == "\x81\x8d\x8f\x90\x9d"


def test_decode_windows1252_length_preserved():
    data = bytes(range(256))
    assert len(decode_windows1252(data)) == 256