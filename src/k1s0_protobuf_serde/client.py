"""Schema Registry クライアント抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import SchemaReference


class SchemaRegistryClient(ABC):
    """Schema Registry クライアント抽象基底クラス。

    失敗は ProtobufSerdeError で通知する。
    - 通信エラー: REGISTRY_UNAVAILABLE
    - 互換性のないスキーマ: REGISTRATION_REJECTED
    - 存在しない ID / subject: SCHEMA_NOT_FOUND
    """

    @abstractmethod
    def register(
        self,
        subject: str,
        schema: str,
        references: list[SchemaReference] | None = None,
    ) -> int:
        """スキーマを subject に登録してスキーマ ID を返す。"""
        ...

    @abstractmethod
    def fetch(self, schema_id: int) -> str:
        """ID でスキーマ本文を取得する。"""
        ...

    @abstractmethod
    def fetch_version(self, schema_id: int, subject: str) -> int:
        """subject における schema_id のバージョン番号を取得する。"""
        ...

    def registered(self, name: str, subject: str) -> bool:
        """このプロセスで (name, subject) の登録を確認済みか。

        リモートクライアントは登録状況を保持しないため常に False。
        """
        return False
