"""protobuf_serde ライブラリの例外型定義"""

from __future__ import annotations


class ProtobufSerdeError(Exception):
    """protobuf_serde ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ProtobufSerdeErrorCodes:
    """ProtobufSerdeError のエラーコード定数。"""

    MALFORMED_WIRE_DATA: str = "MALFORMED_WIRE_DATA"
    TRUNCATED_DATA: str = "TRUNCATED_DATA"
    SCHEMA_NOT_FOUND: str = "SCHEMA_NOT_FOUND"
    REGISTRATION_REJECTED: str = "REGISTRATION_REJECTED"
    REGISTRY_UNAVAILABLE: str = "REGISTRY_UNAVAILABLE"
    DESCRIPTOR_NOT_FOUND: str = "DESCRIPTOR_NOT_FOUND"
    HTTP_ERROR: str = "HTTP_ERROR"


class ConfigError(Exception):
    """設定読み込みのエラー。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ConfigErrorCodes:
    """ConfigError のエラーコード定数。"""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
