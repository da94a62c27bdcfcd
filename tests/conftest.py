"""テスト共通フィクスチャ

tests/schemas 配下の .proto と同じ定義を FileDescriptorProto で組み立て、
専用の DescriptorPool に読み込む。
"""

from pathlib import Path

import pytest
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory, timestamp_pb2
from google.protobuf.descriptor_pool import DescriptorPool
from k1s0_protobuf_serde.catalog import MessageCatalog

SCHEMAS_PATH = Path(__file__).parent / "schemas"

_F = descriptor_pb2.FieldDescriptorProto


def _simple_file() -> descriptor_pb2.FileDescriptorProto:
    fdp = descriptor_pb2.FileDescriptorProto(
        name="simple/simple.proto",
        package="simple.v1",
        syntax="proto3",
    )
    msg = fdp.message_type.add(name="SimpleMessage")
    msg.field.add(name="name", number=1, type=_F.TYPE_STRING, label=_F.LABEL_OPTIONAL)
    return fdp


def _referer_file() -> descriptor_pb2.FileDescriptorProto:
    fdp = descriptor_pb2.FileDescriptorProto(
        name="referenced/referer.proto",
        package="referenced.v1",
        syntax="proto3",
        dependency=["simple/simple.proto", "google/protobuf/timestamp.proto"],
    )
    a = fdp.message_type.add(name="MessageA")
    a.field.add(
        name="simple",
        number=1,
        type=_F.TYPE_MESSAGE,
        type_name=".simple.v1.SimpleMessage",
        label=_F.LABEL_OPTIONAL,
    )
    a.field.add(
        name="created_at",
        number=2,
        type=_F.TYPE_MESSAGE,
        type_name=".google.protobuf.Timestamp",
        label=_F.LABEL_OPTIONAL,
    )
    b = fdp.message_type.add(name="MessageB")
    b.field.add(name="label", number=1, type=_F.TYPE_STRING, label=_F.LABEL_OPTIONAL)
    return fdp


def _build_pool() -> DescriptorPool:
    pool = descriptor_pool.DescriptorPool()
    timestamp = descriptor_pb2.FileDescriptorProto()
    timestamp_pb2.DESCRIPTOR.CopyToProto(timestamp)
    for fdp in (timestamp, _simple_file(), _referer_file()):
        pool.AddSerializedFile(fdp.SerializeToString())
    return pool


@pytest.fixture(scope="session")
def pool() -> DescriptorPool:
    return _build_pool()


@pytest.fixture(scope="session")
def simple_message_class(pool: DescriptorPool):
    return message_factory.GetMessageClass(pool.FindMessageTypeByName("simple.v1.SimpleMessage"))


@pytest.fixture(scope="session")
def message_a_class(pool: DescriptorPool):
    return message_factory.GetMessageClass(pool.FindMessageTypeByName("referenced.v1.MessageA"))


@pytest.fixture
def catalog(pool: DescriptorPool, simple_message_class, message_a_class) -> MessageCatalog:
    return MessageCatalog.from_messages(simple_message_class, message_a_class, pool=pool)


@pytest.fixture(scope="session")
def simple_schema() -> str:
    return (SCHEMAS_PATH / "simple" / "simple.proto").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def referer_schema() -> str:
    return (SCHEMAS_PATH / "referenced" / "referer.proto").read_text(encoding="utf-8")
