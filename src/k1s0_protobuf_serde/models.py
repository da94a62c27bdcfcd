"""Schema Registry データモデル"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class SchemaType(StrEnum):
    """スキーマタイプ。"""

    PROTOBUF = "PROTOBUF"


@dataclass(frozen=True)
class SchemaReference:
    """登録時に渡す依存スキーマの参照。"""

    name: str
    subject: str
    version: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "subject": self.subject, "version": self.version}


@dataclass(frozen=True)
class SubjectVersion:
    """スキーマ ID に紐づく subject とバージョンの組。"""

    subject: str
    version: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubjectVersion:
        return cls(subject=str(data["subject"]), version=int(data["version"]))


@dataclass
class SchemaRegistryConfig:
    """Schema Registry 接続設定。"""

    url: str
    username: str = ""
    password: str = ""
    timeout_seconds: float = 10.0
    schema_context: str = ""
    path_prefix: str = ""
    proxy: str = ""
    ssl_ca_file: str = ""
    client_cert: str = ""
    client_key: str = ""
    client_key_pass: str = ""
    retry_limit: int = 0

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("url cannot be empty")
        if self.retry_limit < 0:
            raise ValueError("retry_limit must be >= 0")
