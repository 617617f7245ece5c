import pytest

from v2gapphand.bits import BitReader, BitWriter, ExiError
from v2gapphand.decoder import decode_document, decode_supported_app_protocol_req
from v2gapphand.types import AppProtocol, ResponseCode


def _write_protocol(writer, protocol):
    writer.write_bits(1, 0)
    writer.write_bits(1, 0)
    writer.write_unsigned(len(protocol.protocol_namespace) + 2)
    writer.write_characters(protocol.protocol_namespace)
    writer.write_bits(1, 0)
    for number in (protocol.version_number_major, protocol.version_number_minor):
        writer.write_bits(1, 0)
        writer.write_bits(1, 0)
        writer.write_unsigned(number)
        writer.write_bits(1, 0)
    writer.write_bits(1, 0)
    writer.write_bits(1, 0)
    writer.write_bits(8, protocol.schema_id)
    writer.write_bits(1, 0)
    writer.write_bits(1, 0)
    writer.write_bits(1, 0)
    writer.write_bits(5, protocol.priority - 1)
    writer.write_bits(1, 0)
    writer.write_bits(1, 0)


def _req_body(protocols, writer=None):
    writer = writer or BitWriter()
    first, *rest = protocols
    writer.write_bits(1, 0)
    _write_protocol(writer, first)
    for protocol in rest:
        writer.write_bits(2, 0)
        _write_protocol(writer, protocol)
    writer.write_bits(2, 1)
    return writer


def _req_document(protocols):
    writer = BitWriter()
    writer.write_header()
    writer.write_bits(2, 0)
    _req_body(protocols, writer)
    return writer.getvalue()


def _protocols(count):
    return [
        AppProtocol(
            protocol_namespace=f"urn:din:70121:2012:MsgDef{i}",
            version_number_major=2,
            version_number_minor=i,
            schema_id=i,
            priority=i + 1,
        )
        for i in range(count)
    ]


def test_decode_response_with_schema_id():
    writer = BitWriter()
    writer.write_header()
    writer.write_bits(2, 1)
    writer.write_bits(1, 0)
    writer.write_bits(1, 0)
    writer.write_bits(2, int(ResponseCode.FAILED_NO_NEGOTIATION))
    writer.write_bits(1, 0)
    writer.write_bits(2, 0)
    writer.write_bits(1, 0)
    writer.write_bits(8, 17)
    writer.write_bits(1, 0)
    writer.write_bits(1, 0)
    res = decode_document(writer.getvalue()).root()
    assert res.response_code == ResponseCode.FAILED_NO_NEGOTIATION
    assert res.schema_id == 17


@pytest.mark.parametrize("count", [1, 2, 5])
def test_decode_request_round_trip(count):
    protocols = _protocols(count)
    doc = decode_document(_req_document(protocols))
    assert doc.supported_app_protocol_res is None
    assert doc.root().app_protocols == protocols


def test_decode_request_from_reader():
    protocols = _protocols(3)
    reader = BitReader(_req_body(protocols).getvalue())
    req = decode_supported_app_protocol_req(reader)
    assert req.app_protocols == protocols


def test_too_many_protocols_rejected():
    with pytest.raises(ExiError):
        decode_document(_req_document(_protocols(5) + _protocols(1)))


@pytest.mark.parametrize("event", [2, 3])
def test_unknown_event_in_request(event):
    writer = BitWriter()
    writer.write_bits(1, 0)
    _write_protocol(writer, _protocols(1)[0])
    writer.write_bits(2, event)
    with pytest.raises(ExiError):
        decode_supported_app_protocol_req(BitReader(writer.getvalue()))


def test_request_must_start_with_app_protocol():
    writer = BitWriter()
    writer.write_bits(1, 1)
    with pytest.raises(ExiError):
        decode_supported_app_protocol_req(BitReader(writer.getvalue()))


@pytest.mark.parametrize("event", [2, 3])
def test_unknown_root_event(event):
    writer = BitWriter()
    writer.write_header()
    writer.write_bits(2, event)
    with pytest.raises(ExiError):
        decode_document(writer.getvalue())


def test_empty_input_rejected():
    with pytest.raises(ExiError):
        decode_document(b"")


def test_bad_header_rejected():
    with pytest.raises(ExiError):
        decode_document(bytes([0x00, 0x40, 0x40]))


def test_truncated_request_rejected():
    data = _req_document(_protocols(2))
    with pytest.raises(ExiError):
        decode_document(data[: len(data) // 2])