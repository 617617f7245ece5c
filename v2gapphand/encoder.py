"""Encoding of supportedAppProtocolReq elements and whole handshake documents."""

from __future__ import annotations

from v2gapphand.bits import BitWriter, ExiError
from v2gapphand.encode_items import encode_app_protocol, encode_supported_app_protocol_res
from v2gapphand.types import (
    APP_PROTOCOL_MAX_COUNT,
    AppHandDocument,
    SupportedAppProtocolReq,
)

# The schema allows up to this many AppProtocol elements in a request.
_SCHEMA_MAX_APP_PROTOCOLS = 20

_EVENT_START_APP_PROTOCOL = 0
_EVENT_END_ELEMENT = 1

_DOC_EVENT_REQ = 0
_DOC_EVENT_RES = 1


def encode_supported_app_protocol_req(
    writer: BitWriter, req: SupportedAppProtocolReq
) -> None:
    """Encode the content of a supportedAppProtocolReq element, up to its end tag."""
    protocols = list(req.app_protocols)
    if not protocols:
        raise ExiError("supportedAppProtocolReq needs at least one AppProtocol")
    if len(protocols) > APP_PROTOCOL_MAX_COUNT:
        raise ExiError(
            f"more than {APP_PROTOCOL_MAX_COUNT} AppProtocol elements are not supported"
        )

    first, *rest = protocols
    writer.write_bits(1, _EVENT_START_APP_PROTOCOL)
    encode_app_protocol(writer, first)
    for protocol in rest:
        writer.write_bits(2, _EVENT_START_APP_PROTOCOL)
        encode_app_protocol(writer, protocol)

    if len(protocols) < _SCHEMA_MAX_APP_PROTOCOLS:
        writer.write_bits(2, _EVENT_END_ELEMENT)
    else:
        # After the last permitted AppProtocol only END_ELEMENT may follow.
        writer.write_bits(1, 0)


def encode_document(doc: AppHandDocument) -> bytes:
    """Encode a handshake document as EXI bytes."""
    writer = BitWriter()
    writer.write_header()
    if doc.supported_app_protocol_req is not None:
        writer.write_bits(2, _DOC_EVENT_REQ)
        encode_supported_app_protocol_req(writer, doc.supported_app_protocol_req)
    elif doc.supported_app_protocol_res is not None:
        writer.write_bits(2, _DOC_EVENT_RES)
        encode_supported_app_protocol_res(writer, doc.supported_app_protocol_res)
    else:
        raise ExiError("document has no root element")
    return writer.getvalue()