"""Decoding of the AppProtocol and supportedAppProtocolRes elements."""

from __future__ import annotations

from collections.abc import Callable

from v2gapphand.bits import BitReader, ExiError
from v2gapphand.types import (
    PROTOCOL_NAMESPACE_MAX_LENGTH,
    AppProtocol,
    ResponseCode,
    SupportedAppProtocolRes,
)

_UINT16_MAX = 0xFFFF
_UINT32_MAX = 0xFFFFFFFF

# String lengths on the wire are offset by two; smaller values are table hits.
_STRING_TABLE_MISS_OFFSET = 2

_SCHEMA_ID_BITS = 8
_PRIORITY_BITS = 5
_PRIORITY_OFFSET = 1
_RESPONSE_CODE_BITS = 2


def _expect_event(reader: BitReader, bits: int, element: str) -> None:
    """Read an event code that may only be zero."""
    if reader.read_bits(bits) != 0:
        raise ExiError(f"unknown event code at {element}")


def _read_characters_event(reader: BitReader, element: str) -> None:
    if reader.read_bits(1) != 0:
        raise ExiError(f"unsupported second level event in {element}")


def _read_end_of_simple_element(reader: BitReader, element: str) -> None:
    if reader.read_bits(1) != 0:
        raise ExiError(f"deviant content in {element} is not supported")


def _read_simple_element(
    reader: BitReader, element: str, read_value: Callable[[BitReader], int | str]
) -> int | str:
    """Read a START_ELEMENT, its CHARACTERS content and its END_ELEMENT."""
    _read_characters_event(reader, element)
    value = read_value(reader)
    _read_end_of_simple_element(reader, element)
    return value


def _read_string(reader: BitReader) -> str:
    length = reader.read_unsigned()
    if length > _UINT16_MAX:
        raise ExiError(f"string length {length} exceeds 16 bits")
    if length < _STRING_TABLE_MISS_OFFSET:
        raise ExiError("string table values are not supported")
    length -= _STRING_TABLE_MISS_OFFSET
    if length > PROTOCOL_NAMESPACE_MAX_LENGTH:
        raise ExiError(
            f"string of {length} characters exceeds {PROTOCOL_NAMESPACE_MAX_LENGTH}"
        )
    return reader.read_characters(length)


def _read_uint32(reader: BitReader) -> int:
    value = reader.read_unsigned()
    if value > _UINT32_MAX:
        raise ExiError(f"unsigned integer {value} exceeds 32 bits")
    return value


def _read_schema_id(reader: BitReader) -> int:
    return reader.read_bits(_SCHEMA_ID_BITS)


def _read_priority(reader: BitReader) -> int:
    return reader.read_bits(_PRIORITY_BITS) + _PRIORITY_OFFSET


def _read_response_code(reader: BitReader) -> ResponseCode:
    raw = reader.read_bits(_RESPONSE_CODE_BITS)
    try:
        return ResponseCode(raw)
    except ValueError:
        raise ExiError(f"unknown response code {raw}") from None


def _read_end_element(reader: BitReader, element: str) -> None:
    _expect_event(reader, 1, element)


def decode_app_protocol(reader: BitReader) -> AppProtocol:
    """Decode the content of one AppProtocol element, up to its end tag."""
    _expect_event(reader, 1, "ProtocolNamespace")
    namespace = _read_simple_element(reader, "ProtocolNamespace", _read_string)
    _expect_event(reader, 1, "VersionNumberMajor")
    major = _read_simple_element(reader, "VersionNumberMajor", _read_uint32)
    _expect_event(reader, 1, "VersionNumberMinor")
    minor = _read_simple_element(reader, "VersionNumberMinor", _read_uint32)
    _expect_event(reader, 1, "SchemaID")
    schema_id = _read_simple_element(reader, "SchemaID", _read_schema_id)
    _expect_event(reader, 1, "Priority")
    priority = _read_simple_element(reader, "Priority", _read_priority)
    _read_end_element(reader, "AppProtocol")
    try:
        return AppProtocol(
            protocol_namespace=namespace,
            version_number_major=major,
            version_number_minor=minor,
            schema_id=schema_id,
            priority=priority,
        )
    except ValueError as exc:
        raise ExiError(str(exc)) from exc


def decode_supported_app_protocol_res(reader: BitReader) -> SupportedAppProtocolRes:
    """Decode the content of a supportedAppProtocolRes element, up to its end tag."""
    _expect_event(reader, 1, "ResponseCode")
    response_code = _read_simple_element(reader, "ResponseCode", _read_response_code)

    event = reader.read_bits(2)
    if event == 1:
        return SupportedAppProtocolRes(response_code=response_code)
    if event != 0:
        raise ExiError("unknown event code after ResponseCode")

    schema_id = _read_simple_element(reader, "SchemaID", _read_schema_id)
    _read_end_element(reader, "supportedAppProtocolRes")
    return SupportedAppProtocolRes(response_code=response_code, schema_id=schema_id)