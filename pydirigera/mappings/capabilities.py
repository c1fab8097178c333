from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..devices import Device


class Capability(Enum):
    """Attributes a device can report as sendable or receivable."""
    BLINDS_STATE = "blindsState"
    COLOR_HUE = "colorHue"
    COLOR_SATURATION = "colorSaturation"
    COLOR_TEMPERATURE = "colorTemperature"
    COORDINATES = "coordinates"
    COUNTRY_CODE = "countryCode"
    CUSTOM_NAME = "customName"
    IS_ON = "isOn"
    LIGHT_LEVEL = "lightLevel"
    LOG_LEVEL = "logLevel"
    PERMITTING_JOIN = "permittingJoin"
    TIME = "time"
    TIMEZONE = "timezone"
    USER_CONSENTS = "userConsents"

CAPABILITIES = {capability.value: capability for capability in Capability}

def missing_capabilities(device: Device, required: Iterable[Capability]) -> frozenset[Capability]:
    """Returns the required capabilities the device does not list as receivable."""
    return frozenset(required) - device.capabilities.can_receive

def can_accept(device: Device, required: Iterable[Capability]) -> bool:
    """True if every required capability is receivable by the device."""
    return not missing_capabilities(device, required)
