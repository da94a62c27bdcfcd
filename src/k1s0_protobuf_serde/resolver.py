"""依存スキーマを含めたスキーマ登録"""

from __future__ import annotations

import structlog
from google.protobuf.descriptor import FileDescriptor

from .cached_client import CachedSchemaRegistryClient
from .catalog import MessageCatalog, is_builtin
from .models import SchemaReference
from .schema_store import LocalSchemaStore


class DependencyResolver:
    """ファイルディスクリプタを依存先から順に登録し、スキーマ ID を返す。

    依存は宣言順に深さ優先で登録され、依存先の subject はファイル名と同じ。
    google/protobuf/ 配下の組み込みスキーマは登録も参照もしない。
    """

    def __init__(
        self,
        registry: CachedSchemaRegistryClient,
        catalog: MessageCatalog,
        store: LocalSchemaStore,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._registry = registry
        self._catalog = catalog
        self._store = store
        self._logger = logger or structlog.stdlib.get_logger(__name__)

    def resolve(self, file_descriptor: FileDescriptor, subject: str | None = None) -> int:
        """file_descriptor を subject に登録済みにしてスキーマ ID を返す。"""
        name = file_descriptor.name
        subject = subject or name
        with self._registry.registration_lock(name, subject):
            schema_id = self._registry.registered_id(name, subject)
            if schema_id is not None:
                return schema_id

            references = [
                self._resolve_reference(dependency)
                for dependency in dependency_names(file_descriptor)
            ]
            schema_id = self._registry.register(
                subject,
                self._store.read(name),
                references,
                name=name,
            )
        self._logger.info(
            "schema registered",
            subject=subject,
            name=name,
            schema_id=schema_id,
            references=[r.name for r in references],
        )
        return schema_id

    def _resolve_reference(self, dependency: str) -> SchemaReference:
        schema_id = self.resolve(self._catalog.file(dependency), dependency)
        version = self._registry.fetch_version(schema_id, dependency)
        self._logger.debug(
            "dependency version resolved",
            subject=dependency,
            schema_id=schema_id,
            version=version,
        )
        return SchemaReference(name=dependency, subject=dependency, version=version)


def dependency_names(file_descriptor: FileDescriptor) -> list[str]:
    """組み込みを除いた依存ファイル名を宣言順で返す。"""
    return [d.name for d in file_descriptor.dependencies if not is_builtin(d.name)]
