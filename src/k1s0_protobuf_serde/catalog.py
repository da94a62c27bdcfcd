"""メッセージカタログ

スキーマファイル名からファイルディスクリプタ、完全修飾名からメッセージクラスを
引けるようにする。起動時に明示的に登録し、以後は更新しない。
"""

from __future__ import annotations

from google.protobuf import descriptor_pool, message_factory
from google.protobuf.descriptor import FileDescriptor
from google.protobuf.descriptor_pool import DescriptorPool
from google.protobuf.message import Message

from .exceptions import ProtobufSerdeError, ProtobufSerdeErrorCodes

BUILTIN_PREFIX = "google/protobuf/"


def is_builtin(file_name: str) -> bool:
    """google/protobuf/ 配下の組み込みスキーマか。"""
    return file_name.startswith(BUILTIN_PREFIX)


class MessageCatalog:
    """スキーマファイルとメッセージクラスの対応表。"""

    def __init__(self, pool: DescriptorPool | None = None) -> None:
        self._pool = pool if pool is not None else descriptor_pool.Default()
        self._files: dict[str, FileDescriptor] = {}
        self._classes: dict[str, type[Message]] = {}

    @classmethod
    def from_messages(
        cls, *message_classes: type[Message], pool: DescriptorPool | None = None
    ) -> MessageCatalog:
        """メッセージクラス群からカタログを作る。"""
        catalog = cls(pool=pool)
        for message_class in message_classes:
            catalog.add_message(message_class)
        return catalog

    def __contains__(self, file_name: object) -> bool:
        return file_name in self._files

    def __len__(self) -> int:
        return len(self._files)

    def add_message(self, message_class: type[Message]) -> None:
        """メッセージクラスとその定義ファイルを登録する。"""
        self._classes[message_class.DESCRIPTOR.full_name] = message_class
        self.add_file(message_class.DESCRIPTOR.file)

    def add_file(self, file_descriptor: FileDescriptor) -> None:
        """ファイルと、その推移的な依存ファイルを登録する。"""
        if is_builtin(file_descriptor.name) or file_descriptor.name in self._files:
            return
        self._files[file_descriptor.name] = file_descriptor
        for descriptor in file_descriptor.message_types_by_name.values():
            self._classes.setdefault(
                descriptor.full_name, message_factory.GetMessageClass(descriptor)
            )
        for dependency in file_descriptor.dependencies:
            self.add_file(dependency)

    def file(self, file_name: str) -> FileDescriptor:
        """ファイル名でファイルディスクリプタを取得する。"""
        try:
            return self._files[file_name]
        except KeyError:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.DESCRIPTOR_NOT_FOUND,
                message=f"Schema file `{file_name}` is not in the message catalog",
            ) from None

    def message_class(self, full_name: str) -> type[Message]:
        """完全修飾名でメッセージクラスを取得する。

        カタログにない場合はディスクリプタプールから探す。
        """
        message_class = self._classes.get(full_name)
        if message_class is not None:
            return message_class
        try:
            descriptor = self._pool.FindMessageTypeByName(full_name)
        except KeyError:
            raise ProtobufSerdeError(
                code=ProtobufSerdeErrorCodes.DESCRIPTOR_NOT_FOUND,
                message=(
                    f"Could not find schema for {full_name}. Make sure the corresponding "
                    ".proto file has been compiled and loaded."
                ),
            ) from None
        return message_factory.GetMessageClass(descriptor)
