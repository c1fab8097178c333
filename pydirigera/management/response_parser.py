"""Pure interpreters turning a raw hub response into domain values."""

from __future__ import annotations

from dataclasses import dataclass
from json import loads
from typing import Any

from ..devices import Device, create_device
from ..exceptions import DecodeError, ProtocolError
from ..scenes import Scene, create_scene
from .parser_utils import ensure_list


@dataclass(frozen=True)
class HubResponse:
    status: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def check_response(response: HubResponse):
    """Raises ProtocolError for any non-success status. Error bodies are never interpreted."""
    if not response.ok:
        raise ProtocolError(response.status, response.body)

def decode_json(response: HubResponse) -> Any:
    check_response(response)
    try:
        return loads(response.body)
    except ValueError as ex:
        raise DecodeError(f"Response body is not valid JSON: {ex}") from ex

def parse_devices_response(response: HubResponse) -> list[Device]:
    devices = ensure_list(decode_json(response), "device listing")
    return [create_device(device_info) for device_info in devices]

def parse_device_response(response: HubResponse) -> Device:
    return create_device(decode_json(response))

def parse_scenes_response(response: HubResponse) -> list[Scene]:
    scenes = ensure_list(decode_json(response), "scene listing")
    return [create_scene(scene_info) for scene_info in scenes]

def parse_scene_response(response: HubResponse) -> Scene:
    return create_scene(decode_json(response))

def parse_empty_response(response: HubResponse):
    """Scene trigger and undo only signal success through the status, any body is ignored."""
    check_response(response)
