import pytest

from v2gapphand.bits import BitReader, BitWriter, ExiError
from v2gapphand.decoder import decode_document, decode_supported_app_protocol_req
from v2gapphand.encoder import encode_document, encode_supported_app_protocol_req
from v2gapphand.types import (
    AppHandDocument,
    AppProtocol,
    ResponseCode,
    SupportedAppProtocolReq,
    SupportedAppProtocolRes,
)


def _protocol(index: int) -> AppProtocol:
    return AppProtocol(
        protocol_namespace=f"urn:iso:15118:2:2013:MsgDef:{index}",
        version_number_major=2,
        version_number_minor=index,
        schema_id=index + 1,
        priority=index + 1,
    )


def test_minimal_response_wire_bytes():
    doc = AppHandDocument(
        supported_app_protocol_res=SupportedAppProtocolRes(
            ResponseCode.OK_SUCCESSFUL_NEGOTIATION
        )
    )
    assert encode_document(doc) == b"\x80\x40\x80"


def test_document_starts_with_exi_header():
    doc = AppHandDocument(supported_app_protocol_req=SupportedAppProtocolReq([_protocol(0)]))
    assert encode_document(doc)[0] == 0x80


@pytest.mark.parametrize("count", [1, 2, 3, 4, 5])
def test_request_round_trip(count):
    req = SupportedAppProtocolReq([_protocol(i) for i in range(count)])
    doc = AppHandDocument(supported_app_protocol_req=req)
    decoded = decode_document(encode_document(doc))
    assert decoded == doc


@pytest.mark.parametrize("code", list(ResponseCode))
@pytest.mark.parametrize("schema_id", [None, 0, 10, 255])
def test_response_round_trip(code, schema_id):
    doc = AppHandDocument(
        supported_app_protocol_res=SupportedAppProtocolRes(code, schema_id)
    )
    assert decode_document(encode_document(doc)) == doc


def test_request_element_round_trip_with_writer():
    req = SupportedAppProtocolReq([_protocol(3), _protocol(7)])
    writer = BitWriter()
    encode_supported_app_protocol_req(writer, req)
    reader = BitReader(writer.getvalue())
    assert decode_supported_app_protocol_req(reader) == req


def test_empty_request_is_rejected():
    doc = AppHandDocument(supported_app_protocol_req=SupportedAppProtocolReq([]))
    with pytest.raises(ExiError):
        encode_document(doc)


def test_too_many_protocols_are_rejected():
    req = SupportedAppProtocolReq([_protocol(i) for i in range(5)])
    req.app_protocols.append(_protocol(5))
    with pytest.raises(ExiError):
        encode_supported_app_protocol_req(BitWriter(), req)


def test_document_without_root_is_rejected():
    with pytest.raises(ExiError):
        encode_document(AppHandDocument())


def test_priority_zero_cannot_be_encoded():
    bad = AppProtocol(
        protocol_namespace="urn:example",
        version_number_major=1,
        version_number_minor=0,
        schema_id=1,
        priority=0,
    )
    doc = AppHandDocument(supported_app_protocol_req=SupportedAppProtocolReq([bad]))
    with pytest.raises(ExiError):
        encode_document(doc)


def test_non_ascii_namespace_round_trip():
    proto = AppProtocol(
        protocol_namespace="urn:tëst:ü",
        version_number_major=0xFFFFFFFF,
        version_number_minor=0,
        schema_id=255,
        priority=32,
    )
    doc = AppHandDocument(supported_app_protocol_req=SupportedAppProtocolReq([proto]))
    decoded = decode_document(encode_document(doc))
    assert decoded.root().app_protocols[0] == proto