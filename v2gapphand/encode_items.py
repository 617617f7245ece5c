"""Encoding of the AppProtocol and supportedAppProtocolRes elements."""

from __future__ import annotations

from v2gapphand.bits import BitWriter, ExiError
from v2gapphand.types import AppProtocol, ResponseCode, SupportedAppProtocolRes

# String lengths on the wire are offset by two to mark a string table miss.
_STRING_TABLE_MISS_OFFSET = 2
_UINT16_MAX = 0xFFFF

_SCHEMA_ID_BITS = 8
_PRIORITY_BITS = 5
_PRIORITY_OFFSET = 1
_RESPONSE_CODE_BITS = 2

_EVENT_SCHEMA_ID = 0
_EVENT_END_ELEMENT = 1


def _write_simple_element(writer: BitWriter, write_value) -> None:
    """Write START_ELEMENT, CHARACTERS, the value and END_ELEMENT of a simple element."""
    writer.write_bits(1, 0)
    writer.write_bits(1, 0)
    write_value()
    writer.write_bits(1, 0)


def _write_string(writer: BitWriter, text: str) -> None:
    encoded_length = len(text) + _STRING_TABLE_MISS_OFFSET
    if encoded_length > _UINT16_MAX:
        raise ExiError(f"string of {len(text)} characters is too long")
    writer.write_unsigned(encoded_length)
    writer.write_characters(text)


def _write_priority(writer: BitWriter, priority: int) -> None:
    encoded = priority - _PRIORITY_OFFSET
    if not 0 <= encoded < (1 << _PRIORITY_BITS):
        raise ExiError(
            f"priority {priority} outside 1..{(1 << _PRIORITY_BITS)}"
        )
    writer.write_bits(_PRIORITY_BITS, encoded)


def encode_app_protocol(writer: BitWriter, protocol: AppProtocol) -> None:
    """Encode the content of one AppProtocol element, up to its end tag."""
    _write_simple_element(writer, lambda: _write_string(writer, protocol.protocol_namespace))
    _write_simple_element(writer, lambda: writer.write_unsigned(protocol.version_number_major))
    _write_simple_element(writer, lambda: writer.write_unsigned(protocol.version_number_minor))
    _write_simple_element(
        writer, lambda: writer.write_bits(_SCHEMA_ID_BITS, protocol.schema_id)
    )
    _write_simple_element(writer, lambda: _write_priority(writer, protocol.priority))
    writer.write_bits(1, 0)


def encode_supported_app_protocol_res(
    writer: BitWriter, res: SupportedAppProtocolRes
) -> None:
    """Encode the content of a supportedAppProtocolRes element, up to its end tag."""
    code = ResponseCode(res.response_code)
    _write_simple_element(
        writer, lambda: writer.write_bits(_RESPONSE_CODE_BITS, int(code))
    )
    if res.schema_id is None:
        writer.write_bits(2, _EVENT_END_ELEMENT)
        return
    writer.write_bits(2, _EVENT_SCHEMA_ID)
    writer.write_bits(1, 0)
    writer.write_bits(_SCHEMA_ID_BITS, res.schema_id)
    writer.write_bits(1, 0)
    writer.write_bits(1, 0)