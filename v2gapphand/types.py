"""Data types of the supportedAppProtocol handshake messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from v2gapphand.bits import ExiError

PROTOCOL_NAMESPACE_MAX_LENGTH = 100
APP_PROTOCOL_MAX_COUNT = 5

_UINT8_MAX = 0xFF
_UINT32_MAX = 0xFFFFFFFF


class ResponseCode(IntEnum):
    """Outcome of the application protocol negotiation."""

    OK_SUCCESSFUL_NEGOTIATION = 0
    OK_SUCCESSFUL_NEGOTIATION_WITH_MINOR_DEVIATION = 1
    FAILED_NO_NEGOTIATION = 2


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass
class AppProtocol:
    """One application protocol offered by the vehicle."""

    protocol_namespace: str
    version_number_major: int
    version_number_minor: int
    schema_id: int
    priority: int

    def __post_init__(self) -> None:
        if len(self.protocol_namespace) > PROTOCOL_NAMESPACE_MAX_LENGTH:
            raise ValueError(
                f"protocol_namespace longer than {PROTOCOL_NAMESPACE_MAX_LENGTH} characters"
            )
        _check_range("version_number_major", self.version_number_major, 0, _UINT32_MAX)
        _check_range("version_number_minor", self.version_number_minor, 0, _UINT32_MAX)
        _check_range("schema_id", self.schema_id, 0, _UINT8_MAX)
        _check_range("priority", self.priority, 0, _UINT8_MAX)


@dataclass
class SupportedAppProtocolReq:
    """Request listing the protocols the vehicle supports."""

    app_protocols: list[AppProtocol] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.app_protocols = list(self.app_protocols)
        if len(self.app_protocols) > APP_PROTOCOL_MAX_COUNT:
            raise ValueError(f"at most {APP_PROTOCOL_MAX_COUNT} app protocols are supported")


@dataclass
class SupportedAppProtocolRes:
    """Response naming the negotiation result and, optionally, the chosen schema."""

    response_code: ResponseCode
    schema_id: int | None = None

    def __post_init__(self) -> None:
        self.response_code = ResponseCode(self.response_code)
        if self.schema_id is not None:
            _check_range("schema_id", self.schema_id, 0, _UINT8_MAX)


@dataclass
class AppHandDocument:
    """A handshake document holding exactly one root element."""

    supported_app_protocol_req: SupportedAppProtocolReq | None = None
    supported_app_protocol_res: SupportedAppProtocolRes | None = None

    def __post_init__(self) -> None:
        if (
            self.supported_app_protocol_req is not None
            and self.supported_app_protocol_res is not None
        ):
            raise ValueError("a document holds either a request or a response, not both")

    def root(self) -> SupportedAppProtocolReq | SupportedAppProtocolRes:
        """Return the root element of the document."""
        if self.supported_app_protocol_req is not None:
            return self.supported_app_protocol_req
        if self.supported_app_protocol_res is not None:
            return self.supported_app_protocol_res
        raise ExiError("document has no root element")