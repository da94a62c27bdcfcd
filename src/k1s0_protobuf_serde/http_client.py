"""Schema Registry HTTP クライアント実装"""

from __future__ import annotations

import ssl
from typing import Any
from urllib.parse import quote

import httpx

from .client import SchemaRegistryClient
from .exceptions import ProtobufSerdeError, ProtobufSerdeErrorCodes
from .models import SchemaReference, SchemaRegistryConfig, SchemaType, SubjectVersion

_CONTENT_TYPE = "application/vnd.schemaregistry.v1+json"


class HttpSchemaRegistryClient(SchemaRegistryClient):
    """httpx を使った Schema Registry HTTP クライアント。"""

    def __init__(self, config: SchemaRegistryConfig) -> None:
        self._config = config
        self._auth: tuple[str, str] | None = None
        if config.username and config.password:
            self._auth = (config.username, config.password)
        self._context_prefix = f":.{config.schema_context}:" if config.schema_context else ""
        self._base_url = config.url.rstrip("/") + "/" + config.path_prefix.strip("/")
        self._verify = self._ssl_context()

    def _ssl_context(self) -> ssl.SSLContext | bool:
        if not (self._config.ssl_ca_file or self._config.client_cert):
            return True
        ctx = ssl.create_default_context(cafile=self._config.ssl_ca_file or None)
        if self._config.client_cert:
            ctx.load_cert_chain(
                certfile=self._config.client_cert,
                keyfile=self._config.client_key or None,
                password=self._config.client_key_pass or None,
            )
        return ctx

    def _make_client(self) -> httpx.Client:
        transport = httpx.HTTPTransport(
            verify=self._verify,
            retries=self._config.retry_limit,
            proxy=self._config.proxy or None,
        )
        return httpx.Client(
            base_url=self._base_url,
            auth=self._auth,
            timeout=self._config.timeout_seconds,
            headers={"Accept": _CONTENT_TYPE},
            transport=transport,
        )

    def _subject_path(self, subject: str) -> str:
        return quote(self._context_prefix + subject, safe="")

    def _handle_error(self, resp: httpx.Response, context: str) -> None:
        if resp.status_code == 404:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.SCHEMA_NOT_FOUND,
                message=f"{context}: schema not found",
            )
        if resp.status_code in (409, 422):
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.REGISTRATION_REJECTED,
                message=f"{context}: HTTP {resp.status_code}: {resp.text}",
            )
        if resp.status_code >= 500:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.REGISTRY_UNAVAILABLE,
                message=f"{context}: HTTP {resp.status_code}: {resp.text}",
            )
        if resp.status_code >= 400:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.HTTP_ERROR,
                message=f"{context}: HTTP {resp.status_code}: {resp.text}",
            )

    def register(
        self,
        subject: str,
        schema: str,
        references: list[SchemaReference] | None = None,
    ) -> int:
        body: dict[str, Any] = {
            "schemaType": SchemaType.PROTOBUF.value,
            "schema": schema,
            "references": [r.to_dict() for r in references or []],
        }
        try:
            with self._make_client() as client:
                resp = client.post(f"subjects/{self._subject_path(subject)}/versions", json=body)
            self._handle_error(resp, f"register({subject})")
            result: dict[str, Any] = resp.json()
            return int(result["id"])
        except ProtobufSerdeError:
            raise
        except httpx.TransportError as e:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.REGISTRY_UNAVAILABLE,
                message=f"Failed to register schema: {e}",
                cause=e,
            ) from e
        except Exception as e:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.HTTP_ERROR,
                message=f"Failed to register schema: {e}",
                cause=e,
            ) from e

    def fetch(self, schema_id: int) -> str:
        params = {"subject": self._context_prefix} if self._context_prefix else None
        try:
            with self._make_client() as client:
                resp = client.get(f"schemas/ids/{schema_id}", params=params)
            self._handle_error(resp, f"fetch({schema_id})")
            data: dict[str, Any] = resp.json()
            return str(data["schema"])
        except ProtobufSerdeError:
            raise
        except httpx.TransportError as e:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.REGISTRY_UNAVAILABLE,
                message=f"Failed to fetch schema: {e}",
                cause=e,
            ) from e
        except Exception as e:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.HTTP_ERROR,
                message=f"Failed to fetch schema: {e}",
                cause=e,
            ) from e

    def fetch_version(self, schema_id: int, subject: str) -> int:
        try:
            with self._make_client() as client:
                resp = client.get(f"schemas/ids/{schema_id}/versions")
            self._handle_error(resp, f"fetch_version({schema_id}, {subject})")
            entries = [SubjectVersion.from_dict(d) for d in resp.json()]
        except ProtobufSerdeError:
            raise
        except httpx.TransportError as e:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.REGISTRY_UNAVAILABLE,
                message=f"Failed to fetch schema versions: {e}",
                cause=e,
            ) from e
        except Exception as e:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.HTTP_ERROR,
                message=f"Failed to fetch schema versions: {e}",
                cause=e,
            ) from e

        candidates = (subject, self._context_prefix + subject)
        for entry in entries:
            if entry.subject in candidates:
                return entry.version
        raise ProtobufSerdeError(
            code=ProtobufSerdeErrorCodes.SCHEMA_NOT_FOUND,
            message=f"Schema with id: {schema_id} is not registered under subject: `{subject}`",
        )
