"""Encodes pydantic records to self-describing bytes and decodes them back."""

import functools
import json
import os
from typing import Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.errors import PydanticUserError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from objstore.constants import RECORD_FORMAT, RECORD_FORMAT_VERSION
from objstore.digest import digest
from objstore.exceptions import ObjectStoreError

R = TypeVar("R", bound=BaseModel)

_ENVELOPE_KEYS = {"format", "version", "type", "schema", "data"}


class Record(BaseModel):
    """
    Base class for values stored through the codec.

    Unknown fields are rejected so that a record written by a newer definition
    is reported as incompatible instead of being silently truncated.
    """
    model_config = ConfigDict(
        extra='forbid',
        ser_json_bytes='base64',
        val_json_bytes='base64',
    )


def _type_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


@functools.lru_cache(maxsize=None)
def _schema_fingerprint(cls: Type[BaseModel]) -> str:
    schema = cls.model_json_schema()
    return digest(json.dumps(schema, sort_keys=True))


def _resolve_type(expected_type: Type[BaseModel], name: str):
    """Find the class called name among expected_type and its subclasses, or None."""
    pending = [expected_type]
    seen = set()
    while pending:
        cls = pending.pop()
        if cls in seen:
            continue
        seen.add(cls)
        if _type_name(cls) == name:
            return cls
        pending.extend(cls.__subclasses__())
    return None


def _canonical(value, bytes_mode: str):
    # Set members have no stable order; sort them by their JSON form.
    if isinstance(value, dict):
        return {key: _canonical(item, bytes_mode) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(item, bytes_mode) for item in value]
    if isinstance(value, (set, frozenset)):
        items = [_canonical(item, bytes_mode) for item in value]
        return sorted(items, key=lambda item: json.dumps(
            to_jsonable_python(item, bytes_mode=bytes_mode), sort_keys=True))
    return value


def _reject_paths(value, where: str) -> None:
    if isinstance(value, os.PathLike):
        raise ObjectStoreError(
            f"Do not encode filesystem paths ({where} is {value!r}). "
            "Read the file's contents with read_bytes() instead, "
            "or use copy_file() to copy it."
        )
    if isinstance(value, BaseModel):
        for name in type(value).model_fields:
            _reject_paths(getattr(value, name), f"{where}.{name}")
    elif isinstance(value, dict):
        for key, item in value.items():
            _reject_paths(key, f"{where} key")
            _reject_paths(item, f"{where}[{key!r}]")
    elif isinstance(value, (list, tuple, set, frozenset)):
        for index, item in enumerate(value):
            _reject_paths(item, f"{where}[{index}]")


def encode(value: BaseModel) -> bytes:
    """
    Serialize a record to bytes.

    Args:
        value: pydantic model instance (normally a Record subclass)

    Returns:
        UTF-8 JSON envelope naming the record type, its schema fingerprint and
        the encoding version, wrapping the record data. Keys are sorted at
        every level and set members are ordered, so equal records give equal bytes.

    Raises:
        ObjectStoreError: If value is (or contains) a filesystem path, is not a
            pydantic model, or holds a member that cannot be serialized
    """
    _reject_paths(value, "value")
    if not isinstance(value, BaseModel):
        raise ObjectStoreError(
            "Serialization error. Only pydantic models (Record subclasses) can be "
            f"encoded, got {type(value).__name__}"
        )
    cls = type(value)
    bytes_mode = cls.model_config.get('ser_json_bytes', 'utf8')
    try:
        data = to_jsonable_python(_canonical(value.model_dump(), bytes_mode), bytes_mode=bytes_mode)
        schema = _schema_fingerprint(cls)
    except (PydanticSerializationError, PydanticUserError) as e:
        raise ObjectStoreError(
            f"Serialization error. Please make sure every field of {cls.__name__} "
            f"is serializable: {e}"
        ) from e

    envelope = {
        "format": RECORD_FORMAT,
        "version": RECORD_FORMAT_VERSION,
        "type": _type_name(cls),
        "schema": schema,
        "data": data,
    }
    return json.dumps(envelope, sort_keys=True, separators=(',', ':')).encode('utf-8')


def _stale(detail: str) -> ObjectStoreError:
    return ObjectStoreError(
        f"Incompatible record definition: {detail}. Stored state may be stale; "
        "discard it and reinitialize."
    )


def decode(data: bytes, expected_type: Type[R]) -> R:
    """
    Deserialize bytes produced by encode() into an instance of expected_type.

    Args:
        data: Encoded record
        expected_type: pydantic model class the record must be an instance of

    Returns:
        Decoded record

    Raises:
        ObjectStoreError: If data was not produced by encode(), holds a record of
            another type, or was written with an incompatible definition
    """
    if not (isinstance(expected_type, type) and issubclass(expected_type, BaseModel)):
        raise ObjectStoreError(
            f"Expected type must be a pydantic model class, got {expected_type!r}"
        )
    if not isinstance(data, (bytes, bytearray)):
        raise ObjectStoreError(f"Cannot decode a value of type {type(data).__name__}; pass bytes")

    not_encoded = ObjectStoreError(
        "Data was not produced by encode(). Please check that this is the right file."
    )
    try:
        envelope = json.loads(bytes(data).decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise not_encoded from e
    if (
        not isinstance(envelope, dict)
        or set(envelope) != _ENVELOPE_KEYS
        or envelope["format"] != RECORD_FORMAT
        or not isinstance(envelope["data"], dict)
    ):
        raise not_encoded

    if envelope["version"] != RECORD_FORMAT_VERSION:
        raise _stale(
            f"encoding version {envelope['version']} cannot be read by "
            f"version {RECORD_FORMAT_VERSION}"
        )

    # A record of a subclass is an instance of expected_type.
    stored_type = _resolve_type(expected_type, envelope["type"])
    if stored_type is None:
        raise ObjectStoreError(
            f"Type mismatch: expected {_type_name(expected_type)}, got {envelope['type']}"
        )
    stored_name = _type_name(stored_type)

    if envelope["schema"] != _schema_fingerprint(stored_type):
        raise _stale(f"{stored_name} has changed since this record was written")

    try:
        return stored_type.model_validate_json(json.dumps(envelope["data"]))
    except ValidationError as e:
        raise _stale(f"{stored_name} does not accept the stored data ({e.error_count()} errors)") from e
