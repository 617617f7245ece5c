# v2gapphand

Encode and decode the EXI-coded application handshake messages that open a
vehicle-to-grid charging session. There are two of them:

- `supportedAppProtocolReq`, in which the vehicle lists the protocols it speaks.
- `supportedAppProtocolRes`, in which the charger answers with the one it chose.

The package is pure Python and has no dependencies.

## Install

```
pip install .
```

## Usage

Build a request, encode it to bytes and decode it again:

```python
from v2gapphand.types import AppHandDocument, AppProtocol, SupportedAppProtocolReq
from v2gapphand.encoder import encode_document
from v2gapphand.decoder import decode_document

req = SupportedAppProtocolReq(
    app_protocols=[
        AppProtocol(
            protocol_namespace="urn:din:70121:2012:MsgDef",
            version_number_major=2,
            version_number_minor=0,
            schema_id=1,
            priority=1,
        ),
    ]
)
data = encode_document(AppHandDocument(supported_app_protocol_req=req))
doc = decode_document(data)
print(doc.root())
```

A response carries a `ResponseCode` and may also carry the chosen schema id:

```python
from v2gapphand.types import AppHandDocument, ResponseCode, SupportedAppProtocolRes
from v2gapphand.encoder import encode_document

res = SupportedAppProtocolRes(
    response_code=ResponseCode.OK_SUCCESSFUL_NEGOTIATION,
    schema_id=1,
)
data = encode_document(AppHandDocument(supported_app_protocol_res=res))
```

An `AppHandDocument` holds either a request or a response. Passing both raises
`ValueError`. `AppHandDocument.root()` returns whichever of the two is set.

## Limits and errors

The data types check their limits when you construct them, and raise
`ValueError` if a limit is broken:

- A request holds at most 5 app protocols.
- A protocol namespace holds at most 100 characters.
- Version numbers must lie between 0 and 2³²−1.
- Schema ids and priorities must lie between 0 and 255.

Encoding and decoding raise `v2gapphand.bits.ExiError`, which is a subclass of
`ValueError`. They raise it in these cases:

- encoding a request that has no app protocol;
- encoding a priority outside 1 to 32, since it is sent in 5 bits;
- encoding a document that has no root element;
- decoding a stream that ends early or does not follow the handshake grammar.

The decoder accepts only the minimal EXI header. It rejects a cookie, header
options and any other format version. String table hits are also rejected.

## Lower-level access

`v2gapphand.bits` has two classes for working on the EXI bit stream directly:

- `BitWriter` offers `write_bits`, `write_unsigned`, `write_characters`, `write_header` and `getvalue`.
- `BitReader` offers `read_bits`, `read_unsigned`, `read_characters` and `read_header`.

Some modules encode or decode single elements without a header:

- `v2gapphand.encode_items` has `encode_app_protocol` and `encode_supported_app_protocol_res`.
- `v2gapphand.decode_items` has `decode_app_protocol` and `decode_supported_app_protocol_res`.
- `v2gapphand.encoder` has `encode_supported_app_protocol_req`.
- `v2gapphand.decoder` has `decode_supported_app_protocol_req`.

## What it does not do

This package covers the application handshake only. It does not do any of the following:

- encode or decode the charging-session messages that follow the handshake;
- add or strip a transport header around the EXI bytes;
- send or receive anything over a network;
- provide a command-line tool.

## Tests

```
pip install .[test]
pytest
```