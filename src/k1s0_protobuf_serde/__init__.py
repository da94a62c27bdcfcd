"""k1s0 protobuf_serde library."""

from .cached_client import CachedSchemaRegistryClient
from .catalog import BUILTIN_PREFIX, MessageCatalog
from .client import SchemaRegistryClient
from .codec import MAGIC_BYTE, ProtobufWireCodec, extract_full_name
from .config import LogSection, RegistrySection, SerdeConfig, load_config
from .exceptions import (
    ConfigError,
    ConfigErrorCodes,
    ProtobufSerdeError,
    ProtobufSerdeErrorCodes,
)
from .http_client import HttpSchemaRegistryClient
from .logger import new_logger
from .memory import InMemorySchemaRegistryClient
from .models import SchemaReference, SchemaRegistryConfig, SchemaType, SubjectVersion
from .resolver import DependencyResolver
from .schema_store import LocalSchemaStore
from .varint import decode_zigzag, encode_zigzag, read_zigzag

__all__ = [
    "ProtobufWireCodec",
    "MAGIC_BYTE",
    "extract_full_name",
    "SchemaRegistryClient",
    "HttpSchemaRegistryClient",
    "CachedSchemaRegistryClient",
    "InMemorySchemaRegistryClient",
    "DependencyResolver",
    "MessageCatalog",
    "BUILTIN_PREFIX",
    "LocalSchemaStore",
    "SchemaType",
    "SchemaReference",
    "SubjectVersion",
    "SchemaRegistryConfig",
    "SerdeConfig",
    "RegistrySection",
    "LogSection",
    "load_config",
    "new_logger",
    "encode_zigzag",
    "decode_zigzag",
    "read_zigzag",
    "ProtobufSerdeError",
    "ProtobufSerdeErrorCodes",
    "ConfigError",
    "ConfigErrorCodes",
]
