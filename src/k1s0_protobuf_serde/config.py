"""設定ファイル読み込み（pydantic BaseModel）"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError, ConfigErrorCodes
from .models import SchemaRegistryConfig


class RegistrySection(BaseModel):
    """Schema Registry 接続設定。"""

    url: str
    username: str = ""
    password: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0)
    schema_context: str = ""
    path_prefix: str = ""
    proxy: str = ""
    ssl_ca_file: str = ""
    client_cert: str = ""
    client_key: str = ""
    client_key_pass: str = ""
    retry_limit: int = Field(default=0, ge=0)

    def to_registry_config(self) -> SchemaRegistryConfig:
        """HTTP クライアント用の SchemaRegistryConfig に変換する。"""
        return SchemaRegistryConfig(**self.model_dump())


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class SerdeConfig(BaseModel):
    """protobuf_serde 設定全体。"""

    schema_registry: RegistrySection
    schemas_path: str | None = None
    log: LogSection = Field(default_factory=LogSection)


def _read_yaml(path: Path) -> dict[str, Any]:
    """YAML ファイルを読み込む。"""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            code=ConfigErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data: dict[str, Any] = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    return data


def load_config(path: Path) -> SerdeConfig:
    """設定ファイルを読み込んで SerdeConfig を返す。

    schemas_path が相対パスの場合は設定ファイルのディレクトリを基準にする。
    """
    data = _read_yaml(path)
    try:
        config = SerdeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            code=ConfigErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
    if config.schemas_path and not Path(config.schemas_path).is_absolute():
        config.schemas_path = str(path.parent / config.schemas_path)
    return config
