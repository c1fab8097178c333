"""
The main API interface for the library.

HubCommands only builds requests and interprets responses, leaving the HTTP call to the caller.
Hub is the same thing with a transport attached, executing each operation end to end.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import load_config
from .const import DEFAULT_CONFIG_PATH, DIRIGERA_PORT
from .devices import Device, Startup
from .exceptions import DecodeError, TransportError
from .management import command, request_builder, response_parser
from .management.command import DeviceCommand
from .management.request_builder import HubEndpoint, HubRequest
from .management.response_parser import HubResponse
from .management.transport import AiohttpTransport, Transport
from .scenes import Scene

_LOGGER = logging.getLogger(__name__)


class HubCommands:
    """Matched request builders and response parsers for every hub operation, without any transport."""

    def __init__(self, ip_address: Any, token: str, port: int = DIRIGERA_PORT):
        self._endpoint = HubEndpoint(str(ip_address), token, port)

    @property
    def endpoint(self) -> HubEndpoint:
        return self._endpoint

    # Devices

    def devices_request(self) -> HubRequest:
        return request_builder.build_devices_request(self._endpoint)

    def devices_parse_response(self, response: HubResponse) -> list[Device]:
        return response_parser.parse_devices_response(response)

    def device_request(self, device_id: str) -> HubRequest:
        return request_builder.build_device_request(self._endpoint, device_id)

    def device_parse_response(self, response: HubResponse) -> Device:
        return response_parser.parse_device_response(response)

    def device_reload_request(self, device: Device) -> HubRequest:
        return self.device_request(device.id)

    def device_reload_parse_response(self, device: Device, response: HubResponse) -> Device:
        """Returns the fresh copy of `device`, for the caller to substitute wholesale."""
        fresh = self.device_parse_response(response)
        if type(fresh) is not type(device) or fresh.id != device.id:
            raise DecodeError(f"Reloaded {fresh.kind.value} {fresh.id} does not match {device.kind.value} {device.id}")
        return fresh

    def toggle_on_off_request(self, device: Device) -> DeviceCommand:
        return command.toggle_on_off_command(self._endpoint, device)

    def set_light_level_request(self, device: Device, level: int) -> DeviceCommand:
        return command.light_level_command(self._endpoint, device, level)

    def set_temperature_request(self, device: Device, temperature: int) -> DeviceCommand:
        return command.color_temperature_command(self._endpoint, device, temperature)

    def set_hue_saturation_request(self, device: Device, hue: float, saturation: float) -> DeviceCommand:
        return command.hue_saturation_command(self._endpoint, device, hue, saturation)

    def set_startup_behaviour_request(self, device: Device, behaviour: Startup | str) -> DeviceCommand:
        return command.startup_behaviour_command(self._endpoint, device, behaviour)

    def set_target_level_request(self, device: Device, level: int) -> DeviceCommand:
        return command.target_level_command(self._endpoint, device, level)

    def rename_request(self, device: Device, new_name: str) -> DeviceCommand:
        return command.rename_command(self._endpoint, device, new_name)

    def command_parse_response(self, device_command: DeviceCommand, response: HubResponse):
        """Applies the command's updates to its device once the hub acknowledged it."""
        device_command.receive(response)

    toggle_on_off_parse_response = command_parse_response
    set_light_level_parse_response = command_parse_response
    set_temperature_parse_response = command_parse_response
    set_hue_saturation_parse_response = command_parse_response
    set_startup_behaviour_parse_response = command_parse_response
    set_target_level_parse_response = command_parse_response
    rename_parse_response = command_parse_response

    # Scenes

    def scenes_request(self) -> HubRequest:
        return request_builder.build_scenes_request(self._endpoint)

    def scenes_parse_response(self, response: HubResponse) -> list[Scene]:
        return response_parser.parse_scenes_response(response)

    def scene_request(self, scene_id: str) -> HubRequest:
        return request_builder.build_scene_request(self._endpoint, scene_id)

    def scene_parse_response(self, response: HubResponse) -> Scene:
        return response_parser.parse_scene_response(response)

    def scene_reload_request(self, scene: Scene) -> HubRequest:
        return self.scene_request(scene.id)

    def scene_reload_parse_response(self, scene: Scene, response: HubResponse) -> Scene:
        fresh = self.scene_parse_response(response)
        if type(fresh) is not type(scene) or fresh.id != scene.id:
            raise DecodeError(f"Reloaded scene {fresh.id} does not match scene {scene.id}")
        return fresh

    def trigger_scene_request(self, scene: Scene) -> HubRequest:
        return request_builder.build_scene_trigger_request(self._endpoint, scene.id)

    def trigger_scene_parse_response(self, response: HubResponse):
        response_parser.parse_empty_response(response)

    def undo_scene_request(self, scene: Scene) -> HubRequest:
        return request_builder.build_scene_undo_request(self._endpoint, scene.id)

    def undo_scene_parse_response(self, response: HubResponse):
        response_parser.parse_empty_response(response)


class Hub(HubCommands):
    """
    A hub with its own transport. Every call performs exactly one round trip, and mutations update
    the passed device only after the hub acknowledged them.
    """

    def __init__(self, ip_address: Any, token: str, transport: Transport | None = None, port: int = DIRIGERA_PORT):
        super().__init__(ip_address, token, port)
        self._transport = transport if transport is not None else AiohttpTransport()

    @classmethod
    def from_config(cls, path: str = DEFAULT_CONFIG_PATH, transport: Transport | None = None) -> Hub:
        """Create a hub from the IP address and token stored in a config file."""
        config = load_config(path)
        return cls(config.ip_address, config.token, transport)

    async def __aenter__(self) -> Hub:
        return self

    async def __aexit__(self, *args: Any):
        await self.close()

    async def close(self):
        await self._transport.close()

    async def devices(self) -> list[Device]:
        """List every device known to the hub."""
        return self.devices_parse_response(await self._send(self.devices_request()))

    async def device(self, device_id: str) -> Device:
        return self.device_parse_response(await self._send(self.device_request(device_id)))

    async def reload_device(self, device: Device):
        """Re-fetch the device and replace every field of the passed instance."""
        fresh = self.device_reload_parse_response(device, await self._send(self.device_reload_request(device)))
        device.replace(fresh)

    async def toggle_on_off(self, device: Device):
        """Toggle a device on or off. Requires IsOn as a receivable capability."""
        await self._run(self.toggle_on_off_request(device))

    async def set_light_level(self, device: Device, level: int):
        """Set light level between 0 and 100. Requires LightLevel as a receivable capability."""
        await self._run(self.set_light_level_request(device, level))

    async def set_temperature(self, device: Device, temperature: int):
        """Set color temperature within the device's reported range. Requires ColorTemperature."""
        await self._run(self.set_temperature_request(device, temperature))

    async def set_hue_saturation(self, device: Device, hue: float, saturation: float):
        """Set hue (0 up to 360) and saturation (0 to 1). Requires ColorHue and ColorSaturation."""
        await self._run(self.set_hue_saturation_request(device, hue, saturation))

    async def set_startup_behaviour(self, device: Device, behaviour: Startup | str):
        await self._run(self.set_startup_behaviour_request(device, behaviour))

    async def set_target_level(self, device: Device, level: int):
        """Set the blinds target level between 0 and 100. Requires BlindsState."""
        await self._run(self.set_target_level_request(device, level))

    async def rename(self, device: Device, new_name: str):
        """Rename a device. Requires CustomName as a receivable capability."""
        await self._run(self.rename_request(device, new_name))

    async def scenes(self) -> list[Scene]:
        """List every scene known to the hub."""
        return self.scenes_parse_response(await self._send(self.scenes_request()))

    async def scene(self, scene_id: str) -> Scene:
        return self.scene_parse_response(await self._send(self.scene_request(scene_id)))

    async def reload_scene(self, scene: Scene):
        fresh = self.scene_reload_parse_response(scene, await self._send(self.scene_reload_request(scene)))
        scene.replace(fresh)

    async def trigger_scene(self, scene: Scene):
        """Trigger a scene now, whether it is scheduled or not."""
        self.trigger_scene_parse_response(await self._send(self.trigger_scene_request(scene)))

    async def undo_scene(self, scene: Scene):
        """Revert the changes made by the scene."""
        self.undo_scene_parse_response(await self._send(self.undo_scene_request(scene)))

    async def _send(self, request: HubRequest) -> HubResponse:
        _LOGGER.debug("Sending %s %s", request.method, request.path)
        response = await self._transport.send(request)
        _LOGGER.debug("Received HTTP %s for %s %s", response.status, request.method, request.path)
        return response

    async def _run(self, device_command: DeviceCommand):
        device_command.mark_sending()
        try:
            response = await self._send(device_command.request)
        except TransportError:
            device_command.mark_failed()
            raise

        self.command_parse_response(device_command, response)
