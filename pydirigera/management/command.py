"""
Capability-gated device mutations.

Each mutation is a short lived DeviceCommand moving through
Idle -> Validating -> (Rejected | Building) -> Sending -> (Failed | Received) -> (ParseError | Applied).
The device is only touched on the transition to Applied.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from ..devices import Device, Startup
from ..exceptions import (
    DirigeraError,
    ProtocolError,
    UnsupportedCapabilityError,
    ValidationError,
)
from ..mappings.capabilities import Capability, missing_capabilities
from . import request_builder
from .request_builder import HubEndpoint, HubRequest
from .response_parser import HubResponse, check_response

_LOGGER = logging.getLogger(__name__)


class CommandState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    BUILDING = "building"
    SENDING = "sending"
    FAILED = "failed"
    RECEIVED = "received"
    PARSE_ERROR = "parse_error"
    APPLIED = "applied"

class DeviceCommandType(Enum):
    TOGGLE_ON_OFF = "toggle_on_off"
    LIGHT_LEVEL = "light_level"
    COLOR_TEMPERATURE = "color_temperature"
    HUE_SATURATION = "hue_saturation"
    STARTUP_BEHAVIOUR = "startup_behaviour"
    TARGET_LEVEL = "target_level"
    RENAME = "rename"

REQUIRED_CAPABILITIES: dict[DeviceCommandType, frozenset[Capability]] = {
    DeviceCommandType.TOGGLE_ON_OFF: frozenset({Capability.IS_ON}),
    DeviceCommandType.LIGHT_LEVEL: frozenset({Capability.LIGHT_LEVEL}),
    DeviceCommandType.COLOR_TEMPERATURE: frozenset({Capability.COLOR_TEMPERATURE}),
    DeviceCommandType.HUE_SATURATION: frozenset({Capability.COLOR_HUE, Capability.COLOR_SATURATION}),
    DeviceCommandType.STARTUP_BEHAVIOUR: frozenset(),
    DeviceCommandType.TARGET_LEVEL: frozenset({Capability.BLINDS_STATE}),
    DeviceCommandType.RENAME: frozenset({Capability.CUSTOM_NAME}),
}


class DeviceCommand:
    """One mutation of one device, from validation until the local update is applied."""

    def __init__(self, device: Device, command_type: DeviceCommandType):
        self.device = device
        self.command_type = command_type
        self.state = CommandState.IDLE
        self.updates: dict[str, Any] = {}
        self.request: HubRequest | None = None

    @property
    def required_capabilities(self) -> frozenset[Capability]:
        return REQUIRED_CAPABILITIES[self.command_type]

    def validate(self, compute_updates: Callable[[], dict[str, Any]]):
        """Runs the capability gate, then the command specific checks producing the attribute updates."""
        self._transition(CommandState.VALIDATING, CommandState.IDLE)

        missing = missing_capabilities(self.device, self.required_capabilities)
        if missing:
            self.state = CommandState.REJECTED
            raise UnsupportedCapabilityError(self.device.id, missing)

        try:
            self.updates = compute_updates()
        except ValidationError:
            self.state = CommandState.REJECTED
            raise

    def build(self, endpoint: HubEndpoint) -> HubRequest:
        self._transition(CommandState.BUILDING, CommandState.VALIDATING)
        self.request = request_builder.build_device_patch_request(endpoint, self.device.id, self.updates)
        return self.request

    def mark_sending(self):
        self._transition(CommandState.SENDING, CommandState.BUILDING)

    def mark_failed(self):
        self._transition(CommandState.FAILED, CommandState.SENDING)

    def receive(self, response: HubResponse):
        """Interprets the hub's answer and, on success, applies the updates to the device."""
        self._transition(CommandState.RECEIVED, CommandState.BUILDING, CommandState.SENDING)

        try:
            check_response(response)
        except ProtocolError:
            self.state = CommandState.FAILED
            raise

        # PATCH bodies carry nothing to decode, so a success status is the acknowledgement
        attributes = self.device.attributes
        for name, value in self.updates.items():
            setattr(attributes, name, value)

        self.state = CommandState.APPLIED
        _LOGGER.debug("Applied %s to device %s: %s", self.command_type.value, self.device.id, self.updates)

    def _transition(self, new_state: CommandState, *allowed: CommandState):
        if self.state not in allowed:
            raise DirigeraError(f"Cannot move {self.command_type.value} command from {self.state.value} to {new_state.value}")
        self.state = new_state

    def __repr__(self) -> str:
        return f"DeviceCommand({self.command_type.value}, device={self.device.id!r}, state={self.state.value})"


def toggle_on_off_command(endpoint: HubEndpoint, device: Device) -> DeviceCommand:
    def compute_updates():
        is_on = device.attributes.is_on
        if is_on is None:
            raise ValidationError(f"Device {device.id} reports no on/off state to toggle")
        return {"is_on": not is_on}

    return _prepare(endpoint, device, DeviceCommandType.TOGGLE_ON_OFF, compute_updates)

def light_level_command(endpoint: HubEndpoint, device: Device, level: int) -> DeviceCommand:
    def compute_updates():
        request_builder.validate_light_level(level)
        return {"light_level": level}

    return _prepare(endpoint, device, DeviceCommandType.LIGHT_LEVEL, compute_updates)

def color_temperature_command(endpoint: HubEndpoint, device: Device, temperature: int) -> DeviceCommand:
    def compute_updates():
        request_builder.validate_color_temperature(device.attributes, temperature)
        return {"color_temperature": temperature}

    return _prepare(endpoint, device, DeviceCommandType.COLOR_TEMPERATURE, compute_updates)

def hue_saturation_command(endpoint: HubEndpoint, device: Device, hue: float, saturation: float) -> DeviceCommand:
    def compute_updates():
        request_builder.validate_hue_saturation(hue, saturation)
        return {"color_hue": float(hue), "color_saturation": float(saturation)}

    return _prepare(endpoint, device, DeviceCommandType.HUE_SATURATION, compute_updates)

def startup_behaviour_command(endpoint: HubEndpoint, device: Device, behaviour: Startup | str) -> DeviceCommand:
    def compute_updates():
        try:
            return {"startup_on_off": Startup(behaviour)}
        except ValueError as ex:
            raise ValidationError(f"Unknown startup behaviour {behaviour!r}") from ex

    return _prepare(endpoint, device, DeviceCommandType.STARTUP_BEHAVIOUR, compute_updates)

def target_level_command(endpoint: HubEndpoint, device: Device, level: int) -> DeviceCommand:
    def compute_updates():
        request_builder.validate_target_level(level)
        return {"blinds_target_level": level}

    return _prepare(endpoint, device, DeviceCommandType.TARGET_LEVEL, compute_updates)

def rename_command(endpoint: HubEndpoint, device: Device, new_name: str) -> DeviceCommand:
    def compute_updates():
        if not isinstance(new_name, str):
            raise ValidationError(f"Name must be a string, got {new_name!r}")
        return {"custom_name": new_name}

    return _prepare(endpoint, device, DeviceCommandType.RENAME, compute_updates)

def _prepare(endpoint: HubEndpoint, device: Device, command_type: DeviceCommandType, compute_updates: Callable[[], dict[str, Any]]) -> DeviceCommand:
    command = DeviceCommand(device, command_type)
    command.validate(compute_updates)
    command.build(endpoint)
    return command
