"""zig-zag 可変長整数のエンコード・デコード

Confluent wire format のメッセージインデックスで使われる形式。
64 ビット符号付き整数を対象とする。
"""

from __future__ import annotations

from .exceptions import ProtobufSerdeError, ProtobufSerdeErrorCodes

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_MAX_VARINT_BYTES = 10


def encode_zigzag(n: int) -> bytes:
    """符号付き整数を zig-zag varint のバイト列に変換する。"""
    if not _INT64_MIN <= n <= _INT64_MAX:
        raise ValueError(f"value out of int64 range: {n}")
    # Python の int は任意精度なので 64 ビットに丸める
    z = ((n << 1) ^ (n >> 63)) & 0xFFFFFFFFFFFFFFFF
    out = bytearray()
    while z & ~0x7F:
        out.append((z & 0x7F) | 0x80)
        z >>= 7
    out.append(z)
    return bytes(out)


def read_zigzag(data: bytes, offset: int = 0) -> tuple[int, int]:
    """data の offset から zig-zag varint を 1 つ読み込む。

    Returns:
        (デコードした値, 次の読み取り位置)

    Raises:
        ProtobufSerdeError: 終端バイトがない場合は TRUNCATED_DATA、
            10 バイトを超える場合は MALFORMED_WIRE_DATA
    """
    z = 0
    shift = 0
    pos = offset
    while True:
        if pos >= len(data):
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.TRUNCATED_DATA,
                message=f"Unterminated varint at offset {offset}",
            )
        if pos - offset >= _MAX_VARINT_BYTES:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.MALFORMED_WIRE_DATA,
                message=f"Varint at offset {offset} exceeds {_MAX_VARINT_BYTES} bytes",
            )
        b = data[pos]
        pos += 1
        z |= (b & 0x7F) << shift
        shift += 7
        if not b & 0x80:
            break
    z &= 0xFFFFFFFFFFFFFFFF
    return (z >> 1) ^ -(z & 1), pos


def decode_zigzag(data: bytes) -> int:
    """zig-zag varint のバイト列を符号付き整数に戻す。"""
    value, _ = read_zigzag(data)
    return value
