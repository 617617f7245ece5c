"""Bit-packed EXI stream primitives."""

from __future__ import annotations

_EXI_HEADER = 0x80
_COOKIE_START = 0x24
_DISTINGUISHING_MASK = 0xC0
_DISTINGUISHING_BITS = 0x80
_OPTIONS_BIT = 0x20


class ExiError(ValueError):
    """Raised when an EXI stream cannot be encoded or decoded."""


class BitWriter:
    """Collects bits most significant first and yields them as bytes."""

    def __init__(self) -> None:
        self._out = bytearray()
        self._acc = 0
        self._pending = 0

    def write_bits(self, n: int, value: int) -> None:
        """Write ``value`` as an ``n``-bit unsigned integer."""
        if n < 0:
            raise ExiError(f"negative bit count {n}")
        if not 0 <= value < (1 << n):
            raise ExiError(f"value {value} does not fit in {n} bits")
        self._acc = (self._acc << n) | value
        self._pending += n
        while self._pending >= 8:
            self._pending -= 8
            self._out.append((self._acc >> self._pending) & 0xFF)
        self._acc &= (1 << self._pending) - 1

    def write_unsigned(self, value: int) -> None:
        """Write an EXI unsigned integer in 7-bit groups, lowest group first."""
        if value < 0:
            raise ExiError(f"unsigned integer cannot be negative: {value}")
        while True:
            group = value & 0x7F
            value >>= 7
            if value:
                self.write_bits(8, group | 0x80)
            else:
                self.write_bits(8, group)
                return

    def write_characters(self, text: str) -> None:
        """Write each character as the unsigned integer of its code point."""
        for char in text:
            self.write_unsigned(ord(char))

    def write_header(self) -> None:
        """Write the minimal EXI header: no cookie, no options, version 1."""
        self.write_bits(8, _EXI_HEADER)

    def getvalue(self) -> bytes:
        """Return the bytes written so far, the last one padded with zero bits."""
        if self._pending:
            return bytes(self._out) + bytes([self._acc << (8 - self._pending)])
        return bytes(self._out)


class BitReader:
    """Reads bits most significant first from a byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def read_bits(self, n: int) -> int:
        """Read an ``n``-bit unsigned integer."""
        if n < 0:
            raise ExiError(f"negative bit count {n}")
        if n == 0:
            return 0
        end = self._pos + n
        if end > len(self._data) * 8:
            raise ExiError("unexpected end of input stream")
        first = self._pos // 8
        last = (end + 7) // 8
        chunk = int.from_bytes(self._data[first:last], "big")
        shift = (last - first) * 8 - (self._pos % 8) - n
        self._pos = end
        return (chunk >> shift) & ((1 << n) - 1)

    def read_unsigned(self) -> int:
        """Read an EXI unsigned integer."""
        result = 0
        shift = 0
        while True:
            octet = self.read_bits(8)
            result |= (octet & 0x7F) << shift
            if not octet & 0x80:
                return result
            shift += 7

    def read_characters(self, length: int) -> str:
        """Read ``length`` characters, each stored as a code point."""
        chars = []
        for _ in range(length):
            code_point = self.read_unsigned()
            if code_point > 0x10FFFF:
                raise ExiError(f"invalid code point {code_point}")
            chars.append(chr(code_point))
        return "".join(chars)

    def read_header(self) -> None:
        """Read and check the EXI header."""
        header = self.read_bits(8)
        if header == _COOKIE_START:
            raise ExiError("EXI header cookie is not supported")
        if header & _DISTINGUISHING_MASK != _DISTINGUISHING_BITS:
            raise ExiError("invalid EXI distinguishing bits")
        if header & _OPTIONS_BIT:
            raise ExiError("EXI header options are not supported")
        if header != _EXI_HEADER:
            raise ExiError("unsupported EXI format version")