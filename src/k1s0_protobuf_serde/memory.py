"""InMemorySchemaRegistryClient 実装"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from .client import SchemaRegistryClient
from .exceptions import ProtobufSerdeError, ProtobufSerdeErrorCodes
from .models import SchemaReference


@dataclass
class RegistryCall:
    """記録されたクライアント呼び出し。"""

    method: str
    args: tuple[object, ...] = field(default_factory=tuple)


class InMemorySchemaRegistryClient(SchemaRegistryClient):
    """テスト用インメモリ Schema Registry クライアント。

    同一スキーマ本文の再登録は subject によらず既存の ID を返す。
    ids に subject ごとの ID を指定すると、その ID で採番する。
    """

    def __init__(self, ids: dict[str, int] | None = None, start_id: int = 1) -> None:
        self._fixed_ids = dict(ids or {})
        self._next_id = start_id
        self._schemas: dict[int, str] = {}
        self._ids_by_content: dict[str, int] = {}
        self._versions: dict[str, list[int]] = {}
        self._references: dict[int, list[SchemaReference]] = {}
        self._lock = threading.Lock()
        self.calls: list[RegistryCall] = []

    def call_count(self, method: str) -> int:
        """指定メソッドの呼び出し回数を返す。"""
        return sum(1 for c in self.calls if c.method == method)

    def references_of(self, schema_id: int) -> list[SchemaReference]:
        """登録時に渡された参照リストを返す。"""
        return list(self._references.get(schema_id, []))

    def register(
        self,
        subject: str,
        schema: str,
        references: list[SchemaReference] | None = None,
    ) -> int:
        with self._lock:
            self.calls.append(RegistryCall("register", (subject, schema, list(references or []))))
            for ref in references or []:
                if not 1 <= ref.version <= len(self._versions.get(ref.subject, [])):
                    raise ProtobufSerdeError(
                        code=ProtobufSerdeErrorCodes.REGISTRATION_REJECTED,
                        message=f"register({subject}): unknown reference {ref.subject} v{ref.version}",
                    )
            versions = self._versions.setdefault(subject, [])
            existing = self._ids_by_content.get(schema)
            if existing is not None:
                if existing not in versions:
                    versions.append(existing)
                return existing
            if subject in self._fixed_ids:
                schema_id = self._fixed_ids[subject]
            else:
                schema_id = self._next_id
                self._next_id += 1
            self._schemas[schema_id] = schema
            self._ids_by_content[schema] = schema_id
            self._references[schema_id] = list(references or [])
            versions.append(schema_id)
            return schema_id

    def fetch(self, schema_id: int) -> str:
        with self._lock:
            self.calls.append(RegistryCall("fetch", (schema_id,)))
            if schema_id not in self._schemas:
                raise ProtobufSerdeError(
                    code=ProtobufSerdeErrorCodes.SCHEMA_NOT_FOUND,
                    message=f"Schema with id: {schema_id} is not found on registry",
                )
            return self._schemas[schema_id]

    def fetch_version(self, schema_id: int, subject: str) -> int:
        with self._lock:
            self.calls.append(RegistryCall("fetch_version", (schema_id, subject)))
            ids = self._versions.get(subject, [])
            if schema_id not in ids:
                raise ProtobufSerdeError(
                    code=ProtobufSerdeErrorCodes.SCHEMA_NOT_FOUND,
                    message=f"Schema with id: {schema_id} is not registered under subject: `{subject}`",
                )
            return ids.index(schema_id) + 1

    def put_schema(self, schema_id: int, schema: str) -> None:
        """登録操作を経ずにスキーマを配置する（デコードのテスト用）。"""
        with self._lock:
            self._schemas[schema_id] = schema
