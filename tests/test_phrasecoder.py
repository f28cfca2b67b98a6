import pytest

from upiqr import phrasecoder


def test_hello_codewords_version_1():
    pc = phrasecoder.encode(max_len=16)
    assert pc.encode_phrase(b"HELLO") == bytearray([
        0x40, 0x54, 0x84, 0x54, 0xC4, 0xC4, 0xF0,
        0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11, 0xEC])


def test_str_is_encoded_as_utf8():
    pc = phrasecoder.encode(max_len=16)
    assert pc.encode_phrase("HELLO") == pc.encode_phrase(b"HELLO")

    # the rupee sign is three bytes, the count indicator counts bytes
    enc = pc.encode_phrase("₹")
    assert enc[0] == 0x40
    assert enc[1] == 0x3E


@pytest.mark.parametrize("max_len", [16, 28, 44, 64, 216])
def test_output_always_fills_capacity(max_len):
    pc = phrasecoder.encode(max_len=max_len)
    for n in (0, 1, max_len // 2, max_len - 2):
        assert len(pc.encode_phrase(b"a" * n)) == max_len


def test_full_capacity_has_no_pad_bytes():
    pc = phrasecoder.encode(max_len=16)
    enc = pc.encode_phrase(b"\xff" * 14)
    assert enc == bytearray([0x40, 0xEF] + [0xFF] * 13 + [0xF0])


def test_empty_phrase_is_all_padding_after_preamble():
    pc = phrasecoder.encode(max_len=16)
    enc = pc.encode_phrase(b"")
    assert enc[:2] == bytearray([0x40, 0x00])
    assert enc[2:] == bytearray([0xEC, 0x11] * 7)


def test_too_long_phrase_raises():
    pc = phrasecoder.encode(max_len=16)
    with pytest.raises(ValueError):
        pc.encode_phrase(b"x" * 15)


def test_unsupported_phrase_type_raises():
    pc = phrasecoder.encode(max_len=16)
    with pytest.raises(TypeError):
        pc.encode_phrase(12345)


def test_missing_capacity_raises():
    with pytest.raises(ValueError):
        phrasecoder.encode()
