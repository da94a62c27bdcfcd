"""キャッシュ付き Schema Registry クライアント"""

from __future__ import annotations

import threading

import structlog

from .client import SchemaRegistryClient
from .models import SchemaReference

logger = structlog.stdlib.get_logger(__name__)


class CachedSchemaRegistryClient(SchemaRegistryClient):
    """上流クライアントの結果をプロセス内にキャッシュするデコレーター。

    登録済みスキーマは不変なので、エントリは追加のみで削除しない。
    - ID -> スキーマ本文
    - (ファイル名, subject) -> スキーマ ID
    - (ID, subject) -> バージョン
    """

    def __init__(self, upstream: SchemaRegistryClient) -> None:
        self._upstream = upstream
        self._schemas_by_id: dict[int, str] = {}
        self._ids_by_name: dict[tuple[str, str], int] = {}
        self._versions: dict[tuple[int, str], int] = {}
        self._key_locks: dict[tuple[str, str], threading.Lock] = {}
        self._lock = threading.Lock()

    @property
    def upstream(self) -> SchemaRegistryClient:
        return self._upstream

    def registration_lock(self, name: str, subject: str) -> threading.Lock:
        """(name, subject) ごとの登録ロックを返す。"""
        key = (name, subject)
        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    def registered(self, name: str, subject: str) -> bool:
        return (name, subject) in self._ids_by_name

    def registered_id(self, name: str, subject: str) -> int | None:
        """登録済みなら (name, subject) のスキーマ ID、未登録なら None。"""
        return self._ids_by_name.get((name, subject))

    def register(
        self,
        subject: str,
        schema: str,
        references: list[SchemaReference] | None = None,
        *,
        name: str | None = None,
    ) -> int:
        """上流に登録し、name 指定時は (name, subject) を登録済みにする。

        上流が失敗した場合はキャッシュを変更しない。
        """
        schema_id = self._upstream.register(subject, schema, references)
        with self._lock:
            if name is not None:
                self._ids_by_name[(name, subject)] = schema_id
            # 空の本文はサーバー側の内容と一致しないためキャッシュしない
            if schema:
                self._schemas_by_id.setdefault(schema_id, schema)
        return schema_id

    def fetch(self, schema_id: int) -> str:
        cached = self._schemas_by_id.get(schema_id)
        if cached is not None:
            logger.debug("schema cache hit", schema_id=schema_id)
            return cached
        schema = self._upstream.fetch(schema_id)
        logger.info("schema fetched", schema_id=schema_id)
        with self._lock:
            return self._schemas_by_id.setdefault(schema_id, schema)

    def fetch_version(self, schema_id: int, subject: str) -> int:
        key = (schema_id, subject)
        cached = self._versions.get(key)
        if cached is not None:
            return cached
        version = self._upstream.fetch_version(schema_id, subject)
        with self._lock:
            self._versions[key] = version
        return version
