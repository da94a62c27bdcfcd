"""ローカルスキーマファイルの読み込み"""

from __future__ import annotations

from pathlib import Path


class LocalSchemaStore:
    """{path}/{ファイル名} からスキーマ本文を読む。

    ファイルがない場合は空文字を返す（レジストリ側に同一内容がある前提）。
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path else None

    @property
    def path(self) -> Path | None:
        return self._path

    def read(self, file_name: str) -> str:
        if self._path is None:
            return ""
        schema_file = self._path / file_name
        if not schema_file.is_file():
            return ""
        return schema_file.read_text(encoding="utf-8")
