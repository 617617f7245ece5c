"""Decoding of supportedAppProtocolReq elements and whole handshake documents."""

from __future__ import annotations

from v2gapphand.bits import BitReader, ExiError
from v2gapphand.decode_items import decode_app_protocol, decode_supported_app_protocol_res
from v2gapphand.types import (
    APP_PROTOCOL_MAX_COUNT,
    AppHandDocument,
    AppProtocol,
    SupportedAppProtocolReq,
)

# The schema allows up to this many AppProtocol elements in a request.
_SCHEMA_MAX_APP_PROTOCOLS = 20

_EVENT_START_APP_PROTOCOL = 0
_EVENT_END_ELEMENT = 1

_DOC_EVENT_REQ = 0
_DOC_EVENT_RES = 1


def _append_protocol(reader: BitReader, protocols: list[AppProtocol]) -> None:
    if len(protocols) >= APP_PROTOCOL_MAX_COUNT:
        raise ExiError(
            f"more than {APP_PROTOCOL_MAX_COUNT} AppProtocol elements are not supported"
        )
    protocols.append(decode_app_protocol(reader))


def decode_supported_app_protocol_req(reader: BitReader) -> SupportedAppProtocolReq:
    """Decode the content of a supportedAppProtocolReq element, up to its end tag."""
    protocols: list[AppProtocol] = []

    if reader.read_bits(1) != _EVENT_START_APP_PROTOCOL:
        raise ExiError("unknown event code at AppProtocol")
    _append_protocol(reader, protocols)

    for _ in range(_SCHEMA_MAX_APP_PROTOCOLS - 1):
        event = reader.read_bits(2)
        if event == _EVENT_END_ELEMENT:
            return SupportedAppProtocolReq(app_protocols=protocols)
        if event != _EVENT_START_APP_PROTOCOL:
            raise ExiError("unknown event code in supportedAppProtocolReq")
        _append_protocol(reader, protocols)

    if reader.read_bits(1) != 0:
        raise ExiError("unknown event code at end of supportedAppProtocolReq")
    return SupportedAppProtocolReq(app_protocols=protocols)


def decode_document(data: bytes) -> AppHandDocument:
    """Decode an EXI handshake document from ``data``."""
    reader = BitReader(data)
    reader.read_header()
    event = reader.read_bits(2)
    if event == _DOC_EVENT_REQ:
        return AppHandDocument(
            supported_app_protocol_req=decode_supported_app_protocol_req(reader)
        )
    if event == _DOC_EVENT_RES:
        return AppHandDocument(
            supported_app_protocol_res=decode_supported_app_protocol_res(reader)
        )
    raise ExiError("unexpected root element event")