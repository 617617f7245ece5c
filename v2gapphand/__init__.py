"""EXI encoding and decoding of the V2G supportedAppProtocol handshake messages."""

__version__ = "0.9.4"
__all__ = ["types", "bits", "decode_items", "decoder", "encode_items", "encoder"]