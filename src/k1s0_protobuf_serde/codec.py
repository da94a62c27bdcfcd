"""Confluent wire format による Protobuf メッセージのエンコード・デコード

スキーマ本体を埋め込む代わりに、Schema Registry が払い出したスキーマ ID を
ヘッダーに載せる。

    offset 0   1 byte   マジックバイト (0x00)
    offset 1   4 bytes  スキーマ ID（ビッグエンディアン符号なし 32 ビット）
    offset 5   可変     メッセージインデックス（zig-zag varint、常に 0）
    以降               シリアライズ済みメッセージ
"""

from __future__ import annotations

import re
import struct
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from google.protobuf.message import DecodeError, Message

from .cached_client import CachedSchemaRegistryClient
from .catalog import MessageCatalog
from .client import SchemaRegistryClient
from .exceptions import ProtobufSerdeError, ProtobufSerdeErrorCodes
from .http_client import HttpSchemaRegistryClient
from .logger import new_logger
from .resolver import DependencyResolver
from .schema_store import LocalSchemaStore
from .varint import encode_zigzag, read_zigzag

if TYPE_CHECKING:
    from .config import SerdeConfig

MAGIC_BYTE = b"\x00"

_SCHEMA_ID = struct.Struct(">I")
_HEADER_SIZE = len(MAGIC_BYTE) + _SCHEMA_ID.size

_PACKAGE_RE = re.compile(r"package (\S+);")
_MESSAGE_RE = re.compile(r"message (\w+) {")


def extract_full_name(schema: str) -> str:
    """スキーマ本文から最初の package と最初の message で完全修飾名を作る。"""
    message = _MESSAGE_RE.search(schema)
    if message is None:
        raise ProtobufSerdeError(
            code=ProtobufSerdeErrorCodes.DESCRIPTOR_NOT_FOUND,
            message="Schema text does not declare any message",
        )
    package = _PACKAGE_RE.search(schema)
    if package is None:
        return message.group(1)
    return f"{package.group(1)}.{message.group(1)}"


class ProtobufWireCodec:
    """Schema Registry を使う Protobuf エンコーダー・デコーダー。

    スキーマが依存するファイルも含めて、(ファイル名, subject) ごとに
    一度だけ登録する。デコード時のスキーマ取得も ID ごとに一度だけ行う。
    """

    def __init__(
        self,
        registry: SchemaRegistryClient,
        catalog: MessageCatalog,
        schemas_path: str | Path | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._logger = logger or structlog.stdlib.get_logger(__name__)
        if isinstance(registry, CachedSchemaRegistryClient):
            self._registry = registry
        else:
            self._registry = CachedSchemaRegistryClient(registry)
        self._catalog = catalog
        self._resolver = DependencyResolver(
            self._registry,
            catalog,
            LocalSchemaStore(schemas_path),
            logger=self._logger,
        )

    @classmethod
    def from_config(cls, config: SerdeConfig, catalog: MessageCatalog) -> ProtobufWireCodec:
        """設定から HTTP クライアントとロガーを組み立てる。"""
        return cls(
            registry=HttpSchemaRegistryClient(config.schema_registry.to_registry_config()),
            catalog=catalog,
            schemas_path=config.schemas_path,
            logger=new_logger(level=config.log.level, format=config.log.format),
        )

    @property
    def registry(self) -> CachedSchemaRegistryClient:
        return self._registry

    def encode(self, message: Message, subject: str | None = None) -> bytes:
        """メッセージをエンコードする。

        Args:
            message: エンコードするメッセージ
            subject: スキーマを登録する subject。省略時はファイル名

        Returns:
            wire format のバイト列
        """
        schema_id = self._resolver.resolve(message.DESCRIPTOR.file, subject)
        # 1 スキーマ 1 メッセージのみ対応するため、インデックスは常に 0
        return b"".join(
            (
                MAGIC_BYTE,
                _SCHEMA_ID.pack(schema_id),
                encode_zigzag(0),
                message.SerializeToString(),
            )
        )

    def decode(self, data: bytes) -> Message:
        """wire format のバイト列を元のメッセージに戻す。"""
        if not data:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.TRUNCATED_DATA,
                message="Expected data to begin with a magic byte, got empty data",
            )
        if data[:1] != MAGIC_BYTE:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.MALFORMED_WIRE_DATA,
                message=f"Expected data to begin with a magic byte, got `{data[:1]!r}`",
            )
        if len(data) < _HEADER_SIZE:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.TRUNCATED_DATA,
                message=f"Expected {_HEADER_SIZE} header bytes, got {len(data)}",
            )
        (schema_id,) = _SCHEMA_ID.unpack_from(data, len(MAGIC_BYTE))
        _, offset = read_zigzag(data, _HEADER_SIZE)

        schema = self._registry.fetch(schema_id)
        full_name = extract_full_name(schema)
        message_class = self._catalog.message_class(full_name)
        try:
            return message_class.FromString(data[offset:])
        except DecodeError as e:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.MALFORMED_WIRE_DATA,
                message=f"Failed to decode {full_name} payload: {e}",
                cause=e,
            ) from e

