from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .mappings.capabilities import Capability


class DirigeraError(Exception):
    """Dirigera error."""

class ValidationError(DirigeraError):
    """A command was rejected before any request was sent."""

class UnsupportedCapabilityError(ValidationError):
    """The device does not accept every capability the command requires."""

    def __init__(self, device_id: str, missing: Iterable[Capability]):
        self.device_id = device_id
        self.missing = frozenset(missing)
        names = ", ".join(sorted(capability.value for capability in self.missing))
        super().__init__(f"Device {device_id} cannot receive: {names}")

class AttributeNotApplicableError(DirigeraError):
    """The attribute does not apply to this kind of device."""

    def __init__(self, kind: str, attribute: str):
        self.kind = kind
        self.attribute = attribute
        super().__init__(f"Attribute '{attribute}' is not applicable to {kind} devices")

class TransportError(DirigeraError):
    """The request never got an HTTP response."""

class ProtocolError(DirigeraError):
    """The hub answered with a non-success status."""

    def __init__(self, status: int, body: bytes = b""):
        self.status = status
        self.body = body
        super().__init__(f"Hub responded with HTTP status {status}")

class DecodeError(DirigeraError):
    """The response body did not match the expected shape."""

class ConfigError(DirigeraError):
    """The persisted configuration is missing or malformed."""
