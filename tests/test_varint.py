"""zig-zag varint のユニットテスト"""

import pytest
from k1s0_protobuf_serde.exceptions import ProtobufSerdeError, ProtobufSerdeErrorCodes
from k1s0_protobuf_serde.varint import decode_zigzag, encode_zigzag, read_zigzag


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, b"\x00"),
        (-1, b"\x01"),
        (1, b"\x02"),
        (-2, b"\x03"),
        (63, b"\x7e"),
        (-64, b"\x7f"),
        (64, b"\x80\x01"),
        (2147483647, b"\xfe\xff\xff\xff\x0f"),
        (-2147483648, b"\xff\xff\xff\xff\x0f"),
    ],
)
def test_encode_zigzag_known_values(value: int, expected: bytes) -> None:
    """既知の値が Avro / Confluent と同じバイト列になること。"""
    assert encode_zigzag(value) == expected


@pytest.mark.parametrize(
    "value",
    [0, 1, -1, 300, -300, 2**31, -(2**31) - 1, 2**63 - 1, -(2**63)],
)
def test_zigzag_round_trip(value: int) -> None:
    """エンコードしてデコードすると元の値に戻ること。"""
    assert decode_zigzag(encode_zigzag(value)) == value


def test_encode_zigzag_int64_bounds_use_ten_bytes() -> None:
    """int64 の両端は 10 バイトになること。"""
    assert len(encode_zigzag(2**63 - 1)) == 10
    assert len(encode_zigzag(-(2**63))) == 10


def test_encode_zigzag_out_of_range() -> None:
    """int64 の範囲外は ValueError になること。"""
    with pytest.raises(ValueError):
        encode_zigzag(2**63)
    with pytest.raises(ValueError):
        encode_zigzag(-(2**63) - 1)


def test_read_zigzag_returns_next_offset() -> None:
    """読み取り後の位置が返ること。"""
    data = b"\xaa" + encode_zigzag(-300) + b"rest"
    value, offset = read_zigzag(data, 1)
    assert value == -300
    assert data[offset:] == b"rest"


def test_read_zigzag_unterminated() -> None:
    """継続ビットで終わるデータは TRUNCATED_DATA になること。"""
    with pytest.raises(ProtobufSerdeError) as exc_info:
        read_zigzag(b"\x80\x80")
    assert exc_info.value.code == ProtobufSerdeErrorCodes.TRUNCATED_DATA


def test_read_zigzag_empty() -> None:
    """空データは TRUNCATED_DATA になること。"""
    with pytest.raises(ProtobufSerdeError) as exc_info:
        decode_zigzag(b"")
    assert exc_info.value.code == ProtobufSerdeErrorCodes.TRUNCATED_DATA


def test_read_zigzag_too_long() -> None:
    """10 バイトを超える varint は MALFORMED_WIRE_DATA になること。"""
    with pytest.raises(ProtobufSerdeError) as exc_info:
        decode_zigzag(b"\xff" * 11 + b"\x00")
    assert exc_info.value.code == ProtobufSerdeErrorCodes.MALFORMED_WIRE_DATA
