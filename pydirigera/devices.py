"""Contains definitions for the devices managed by a Dirigera hub."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .exceptions import AttributeNotApplicableError, DecodeError
from .management.parser_utils import (
    TimestampMode,
    ensure_object,
    get_string_list,
    get_value,
    parse_timestamp,
)
from .mappings.capabilities import CAPABILITIES, Capability
from .mappings.device_types import DEVICE_TYPES, DeviceKind, DeviceType

_LOGGER = logging.getLogger(__name__)


class Startup(Enum):
    """How a device powers up, f.ex. after a power outage."""
    START_ON = "startOn"
    START_OFF = "startOff"
    START_PREVIOUS = "startPrevious"
    START_TOGGLE = "startToggle"

# attribute name: (wire name, type, required)
ATTRIBUTE_FIELDS: dict[str, tuple[str, type, bool]] = {
    "custom_name": ("customName", str, True),
    "firmware_version": ("firmwareVersion", str, True),
    "hardware_version": ("hardwareVersion", str, True),
    "manufacturer": ("manufacturer", str, True),
    "model": ("model", str, True),
    "serial_number": ("serialNumber", str, True),
    "ota_policy": ("otaPolicy", str, False),
    "ota_progress": ("otaProgress", int, False),
    "ota_schedule_end": ("otaScheduleEnd", str, False),
    "ota_schedule_start": ("otaScheduleStart", str, False),
    "ota_state": ("otaState", str, False),
    "ota_status": ("otaStatus", str, False),
    "product_code": ("productCode", str, False),
    "is_on": ("isOn", bool, False),
    "startup_on_off": ("startupOnOff", Startup, False),
    "light_level": ("lightLevel", int, False),
    "permitting_join": ("permittingJoin", bool, False),
    "color_mode": ("colorMode", str, False),
    "color_temperature": ("colorTemperature", int, False),
    "color_temperature_min": ("colorTemperatureMin", int, False),
    "color_temperature_max": ("colorTemperatureMax", int, False),
    "startup_temperature": ("startupTemperature", int, False),
    "color_hue": ("colorHue", float, False),
    "color_saturation": ("colorSaturation", float, False),
    "circadian_rhythm_mode": ("circadianRhythmMode", str, False),
    "battery_percentage": ("batteryPercentage", int, False),
    "blinds_current_level": ("blindsCurrentLevel", int, False),
    "blinds_target_level": ("blindsTargetLevel", int, False),
    "blinds_state": ("blindsState", str, False),
    "current_temperature": ("currentTemperature", float, False),
    "current_rh": ("currentRH", int, False),
    "current_pm25": ("currentPM25", int, False),
    "max_measured_pm25": ("maxMeasuredPM25", int, False),
    "min_measured_pm25": ("minMeasuredPM25", int, False),
    "voc_index": ("vocIndex", int, False),
    "is_open": ("isOpen", bool, False),
}

_COMMON_ATTRIBUTES = frozenset({
    "custom_name",
    "firmware_version",
    "hardware_version",
    "manufacturer",
    "model",
    "serial_number",
    "ota_policy",
    "ota_progress",
    "ota_schedule_end",
    "ota_schedule_start",
    "ota_state",
    "ota_status",
    "product_code",
})

_BLINDS_ATTRIBUTES = frozenset({"blinds_current_level", "blinds_target_level", "blinds_state"})


def attribute_wire_name(name: str) -> str:
    """Returns the camelCase name the hub uses for an attribute."""
    return ATTRIBUTE_FIELDS[name][0]

def create_device(device_info: dict[str, Any]) -> Device:
    """Builds the device variant matching the record's `type` tag."""
    device_info = ensure_object(device_info, "device")
    kind = get_value(device_info, "type", DeviceKind)
    data = DeviceData.from_api(device_info)

    match kind:
        case DeviceKind.BLIND:
            return Blind(data)
        case DeviceKind.CONTROLLER:
            return Controller(data)
        case DeviceKind.GATEWAY:
            return Gateway(data)
        case DeviceKind.LIGHT:
            return Light(data)
        case DeviceKind.OUTLET:
            return Outlet(data)
        case DeviceKind.SENSOR:
            return Sensor(data)


@dataclass
class Attributes:
    """
    Attributes for every kind of device, flattened into one record the same way the hub sends them.
    Fields that do not apply to a device's kind are None. Use Device.attribute() for a kind-checked read.
    """

    custom_name: str
    firmware_version: str
    hardware_version: str
    manufacturer: str
    model: str
    serial_number: str
    ota_policy: str | None = None
    ota_progress: int | None = None
    ota_schedule_end: str | None = None
    ota_schedule_start: str | None = None
    ota_state: str | None = None
    ota_status: str | None = None
    product_code: str | None = None

    # Light, controller and outlet
    is_on: bool | None = None

    # Light and outlet
    startup_on_off: Startup | None = None

    # Light
    light_level: int | None = None
    permitting_join: bool | None = None
    color_mode: str | None = None
    color_temperature: int | None = None
    color_temperature_min: int | None = None
    color_temperature_max: int | None = None
    startup_temperature: int | None = None
    color_hue: float | None = None
    color_saturation: float | None = None
    circadian_rhythm_mode: str | None = None

    # Controller
    battery_percentage: int | None = None

    # Blinds and controller
    blinds_current_level: int | None = None
    blinds_target_level: int | None = None
    blinds_state: str | None = None

    # Environment sensor
    current_temperature: float | None = None
    current_rh: int | None = None
    current_pm25: int | None = None
    max_measured_pm25: int | None = None
    min_measured_pm25: int | None = None
    voc_index: int | None = None

    # Open and close sensor
    is_open: bool | None = None

    @classmethod
    def from_api(cls, data: Any) -> Attributes:
        data = ensure_object(data, "attributes")
        return cls(**{
            name: get_value(data, wire_name, kind, required=required)
            for name, (wire_name, kind, required) in ATTRIBUTE_FIELDS.items()
        })


@dataclass
class Room:
    """The room a device is placed in, with the icon and color picked in the app."""

    id: str
    name: str
    color: str
    icon: str

    @classmethod
    def from_api(cls, data: Any) -> Room:
        data = ensure_object(data, "room")
        return cls(
            id=get_value(data, "id", str),
            name=get_value(data, "name", str),
            color=get_value(data, "color", str),
            icon=get_value(data, "icon", str),
        )


@dataclass
class Capabilities:
    can_send: frozenset[Capability]
    can_receive: frozenset[Capability]

    @classmethod
    def from_api(cls, data: Any) -> Capabilities:
        data = ensure_object(data, "capabilities")
        return cls(
            can_send=_parse_capability_list(data, "canSend"),
            can_receive=_parse_capability_list(data, "canReceive"),
        )


@dataclass
class DeviceData:
    """Common data that is shared between all devices."""

    id: str
    device_type: DeviceType
    created_at: datetime
    is_reachable: bool
    last_seen: datetime
    attributes: Attributes
    capabilities: Capabilities
    is_hidden: bool | None = None
    room: Room | None = None
    remote_links: list[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> DeviceData:
        room = data.get("room")

        return cls(
            id=get_value(data, "id", str),
            device_type=_parse_device_type(data),
            created_at=parse_timestamp(data, "createdAt", TimestampMode.REQUIRED),
            is_reachable=get_value(data, "isReachable", bool),
            last_seen=parse_timestamp(data, "lastSeen", TimestampMode.REQUIRED),
            attributes=Attributes.from_api(data.get("attributes")),
            capabilities=Capabilities.from_api(data.get("capabilities")),
            is_hidden=get_value(data, "isHidden", bool, required=False),
            room=Room.from_api(room) if room is not None else None,
            remote_links=get_string_list(data, "remoteLinks") or [],
        )


class Device:
    """
    Definition for a generic device. Each kind of device is its own subclass, all of them wrapping
    the same DeviceData record.
    """

    kind: DeviceKind
    applicable_attributes: frozenset[str] = _COMMON_ATTRIBUTES

    def __init__(self, data: DeviceData):
        self._data = data

    @property
    def data(self) -> DeviceData:
        """The shared record, regardless of the device kind."""
        return self._data

    @property
    def id(self) -> str:
        return self._data.id

    @property
    def name(self) -> str:
        return self._data.attributes.custom_name

    @property
    def device_type(self) -> DeviceType:
        return self._data.device_type

    @property
    def attributes(self) -> Attributes:
        return self._data.attributes

    @property
    def capabilities(self) -> Capabilities:
        return self._data.capabilities

    def attribute(self, name: str) -> Any:
        """Reads an attribute, refusing the ones that do not apply to this kind of device."""
        if name not in self.applicable_attributes:
            raise AttributeNotApplicableError(self.kind.value, name)

        return getattr(self._data.attributes, name)

    def replace(self, other: Device):
        """Replaces the whole record with a freshly fetched copy of the same device."""
        if type(other) is not type(self) or other.id != self.id:
            raise DecodeError(f"Reloaded {other.kind.value} {other.id} does not match {self.kind.value} {self.id}")

        self._data = other.data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Device):
            return NotImplemented
        return type(other) is type(self) and other.data == self._data

    def __hash__(self) -> int:
        return hash((type(self), self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, name={self.name!r})"


class Blind(Device):
    kind = DeviceKind.BLIND
    applicable_attributes = _COMMON_ATTRIBUTES | _BLINDS_ATTRIBUTES

    @property
    def current_level(self) -> int | None:
        return self.attribute("blinds_current_level")

    @property
    def target_level(self) -> int | None:
        return self.attribute("blinds_target_level")


class Controller(Device):
    kind = DeviceKind.CONTROLLER
    applicable_attributes = _COMMON_ATTRIBUTES | _BLINDS_ATTRIBUTES | {"is_on", "battery_percentage"}

    @property
    def battery_percentage(self) -> int | None:
        return self.attribute("battery_percentage")


class Gateway(Device):
    kind = DeviceKind.GATEWAY
    applicable_attributes = _COMMON_ATTRIBUTES | {"permitting_join"}


class Light(Device):
    """Class for representing lights."""
    kind = DeviceKind.LIGHT
    applicable_attributes = _COMMON_ATTRIBUTES | {
        "is_on",
        "startup_on_off",
        "light_level",
        "permitting_join",
        "color_mode",
        "color_temperature",
        "color_temperature_min",
        "color_temperature_max",
        "startup_temperature",
        "color_hue",
        "color_saturation",
        "circadian_rhythm_mode",
    }

    @property
    def is_on(self) -> bool | None:
        return self.attribute("is_on")

    @property
    def light_level(self) -> int | None:
        return self.attribute("light_level")

    @property
    def color_temperature(self) -> int | None:
        return self.attribute("color_temperature")

    @property
    def hue_saturation(self) -> tuple[float | None, float | None]:
        return self.attribute("color_hue"), self.attribute("color_saturation")


class Outlet(Device):
    kind = DeviceKind.OUTLET
    applicable_attributes = _COMMON_ATTRIBUTES | {"is_on", "startup_on_off"}

    @property
    def is_on(self) -> bool | None:
        return self.attribute("is_on")


class Sensor(Device):
    kind = DeviceKind.SENSOR
    applicable_attributes = _COMMON_ATTRIBUTES | {
        "current_temperature",
        "current_rh",
        "current_pm25",
        "max_measured_pm25",
        "min_measured_pm25",
        "voc_index",
        "is_open",
    }

    @property
    def is_open(self) -> bool | None:
        return self.attribute("is_open")


def _parse_device_type(data: dict[str, Any]) -> DeviceType:
    raw_type = get_value(data, "deviceType", str)
    device_type = DEVICE_TYPES.get(raw_type, DeviceType.UNKNOWN)
    if device_type is DeviceType.UNKNOWN:
        _LOGGER.debug("Unknown device type '%s' for device %s", raw_type, data.get("id"))

    return device_type

def _parse_capability_list(data: dict[str, Any], wire_name: str) -> frozenset[Capability]:
    names = get_string_list(data, wire_name, required=True)
    capabilities = set()

    for name in names:
        capability = CAPABILITIES.get(name)
        if capability is None:
            _LOGGER.debug("Skipping unknown capability '%s'", name)
            continue
        capabilities.add(capability)

    return frozenset(capabilities)
