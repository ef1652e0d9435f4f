import hashlib

import pytest

from coreason_dataref.codec import (
    decode_base64,
    decode_utf8,
    encode_base64,
    encode_utf8,
    from_json_text,
    to_json_text,
)
from coreason_dataref.exceptions import DataRefError, DecodeError
from coreason_dataref.hashing import content_hash


def test_decode_base64() -> None:
    assert decode_base64("aGVsbG8=") == b"hello"
    assert encode_base64(b"hello") == "aGVsbG8="


@pytest.mark.parametrize("value", ["aGVsbG8", "aGVs bG8=", "aGVs\nbG8=", "aGVs\r\nbG8\t"])
def test_decode_base64_tolerates_whitespace_and_missing_padding(value: str) -> None:
    assert decode_base64(value) == b"hello"


def test_decode_base64_line_wrapped() -> None:
    raw = bytes(range(200))
    encoded = encode_base64(raw)
    wrapped = "\n".join(encoded[i : i + 76] for i in range(0, len(encoded), 76))
    assert decode_base64(wrapped) == raw


@pytest.mark.parametrize("value", ["not base64!", "a", "@@@@", "aGVs\u00a0bG8="])
def test_decode_base64_rejects_malformed(value: str) -> None:
    with pytest.raises(DecodeError):
        decode_base64(value)


def test_utf8_errors() -> None:
    with pytest.raises(DecodeError):
        decode_utf8(b"\xff\xfe")
    with pytest.raises(DecodeError):
        encode_utf8("\ud800")


def test_json_text_is_compact() -> None:
    assert to_json_text({"a": 1}) == '{"a":1}'
    assert to_json_text({"k": [1, "é"]}) == '{"k":[1,"é"]}'


def test_json_errors() -> None:
    with pytest.raises(DecodeError):
        to_json_text({"a": object()})
    with pytest.raises(DecodeError):
        to_json_text({"a": float("nan")})
    with pytest.raises(DecodeError):
        to_json_text([float("inf")])
    with pytest.raises(DecodeError):
        from_json_text("{not json")


def test_decode_error_is_value_error() -> None:
    assert issubclass(DecodeError, ValueError)
    assert issubclass(DecodeError, DataRefError)


def test_content_hash_is_sha1() -> None:
    assert content_hash(b"hello") == hashlib.sha1(b"hello").hexdigest()
    # strings are hashed over their UTF-8 bytes
    assert content_hash("aGVsbG8=") == hashlib.sha1(b"aGVsbG8=").hexdigest()
    assert content_hash("é") == content_hash("é".encode("utf-8"))
