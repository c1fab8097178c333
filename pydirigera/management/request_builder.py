"""
Pure builders for hub requests. Nothing here performs I/O; the resulting HubRequest can be sent
with any HTTP client.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from json import dumps
from typing import Any
from urllib.parse import quote

from ..const import (
    DEVICES_RESOURCE,
    DIRIGERA_API_VERSION,
    DIRIGERA_PORT,
    JSON_CONTENT_TYPE,
    SCENE_TRIGGER_ACTION,
    SCENE_UNDO_ACTION,
    SCENES_RESOURCE,
    USER_AGENT,
)
from ..devices import Attributes, attribute_wire_name
from ..exceptions import ValidationError

LIGHT_LEVEL_MIN = 0
LIGHT_LEVEL_MAX = 100
TARGET_LEVEL_MIN = 0
TARGET_LEVEL_MAX = 100
HUE_MIN = 0.0
HUE_MAX = 360.0
SATURATION_MIN = 0.0
SATURATION_MAX = 1.0


@dataclass(frozen=True)
class HubEndpoint:
    """Where the hub lives and the bearer token used to talk to it."""

    host: str
    token: str
    port: int = DIRIGERA_PORT

    @property
    def base_url(self) -> str:
        return f"https://{self.host}:{self.port}"


@dataclass(frozen=True)
class HubRequest:
    method: str
    url: str
    path: str
    headers: dict[str, str] = field(hash=False)
    body: bytes | None = None


def build_path(resource: str, resource_id: str | None = None, action: str | None = None) -> str:
    """Builds `/v1/<resource>[/<id>[/<action>]]`."""
    if action is not None and resource_id is None:
        raise ValueError(f"Action '{action}' needs a {resource} id")

    segments = [DIRIGERA_API_VERSION, resource]
    if resource_id is not None:
        segments.append(quote(resource_id, safe=""))
        if action is not None:
            segments.append(action)

    return "/" + "/".join(segments)

def build_request(endpoint: HubEndpoint, method: str, path: str, body: Any = None) -> HubRequest:
    headers = {
        "Authorization": f"Bearer {endpoint.token}",
        "User-Agent": USER_AGENT,
    }

    encoded_body = None
    if body is not None:
        encoded_body = dumps(body, separators=(",", ":")).encode("utf-8")
        headers["Content-Type"] = JSON_CONTENT_TYPE

    return HubRequest(method, endpoint.base_url + path, path, headers, encoded_body)

def build_devices_request(endpoint: HubEndpoint) -> HubRequest:
    return build_request(endpoint, "GET", build_path(DEVICES_RESOURCE))

def build_device_request(endpoint: HubEndpoint, device_id: str) -> HubRequest:
    return build_request(endpoint, "GET", build_path(DEVICES_RESOURCE, device_id))

def build_device_patch_request(endpoint: HubEndpoint, device_id: str, updates: dict[str, Any]) -> HubRequest:
    """
    PATCHes attributes on a device. The hub expects a one element list wrapping the attributes object,
    keyed by the camelCase wire names.
    """
    attributes = {attribute_wire_name(name): _serialize_value(value) for name, value in updates.items()}
    return build_request(endpoint, "PATCH", build_path(DEVICES_RESOURCE, device_id), [{"attributes": attributes}])

def build_scenes_request(endpoint: HubEndpoint) -> HubRequest:
    return build_request(endpoint, "GET", build_path(SCENES_RESOURCE))

def build_scene_request(endpoint: HubEndpoint, scene_id: str) -> HubRequest:
    return build_request(endpoint, "GET", build_path(SCENES_RESOURCE, scene_id))

def build_scene_trigger_request(endpoint: HubEndpoint, scene_id: str) -> HubRequest:
    return build_request(endpoint, "POST", build_path(SCENES_RESOURCE, scene_id, SCENE_TRIGGER_ACTION))

def build_scene_undo_request(endpoint: HubEndpoint, scene_id: str) -> HubRequest:
    return build_request(endpoint, "POST", build_path(SCENES_RESOURCE, scene_id, SCENE_UNDO_ACTION))

def validate_light_level(level: int):
    """Light level must be between 0 and 100 inclusive."""
    _require_integer(level, "light level")
    if not LIGHT_LEVEL_MIN <= level <= LIGHT_LEVEL_MAX:
        raise ValidationError(f"Light level {level} must be between {LIGHT_LEVEL_MIN} and {LIGHT_LEVEL_MAX}")

def validate_target_level(level: int):
    """Blinds target level must be between 0 and 100 inclusive."""
    _require_integer(level, "target level")
    if not TARGET_LEVEL_MIN <= level <= TARGET_LEVEL_MAX:
        raise ValidationError(f"Target level {level} must be between {TARGET_LEVEL_MIN} and {TARGET_LEVEL_MAX}")

def validate_hue_saturation(hue: float, saturation: float):
    """Hue is in degrees, 0 up to but not including 360. Saturation is between 0 and 1 inclusive."""
    _require_number(hue, "hue")
    _require_number(saturation, "saturation")
    if not HUE_MIN <= hue < HUE_MAX:
        raise ValidationError(f"Hue {hue} must be at least {HUE_MIN} and below {HUE_MAX}")
    if not SATURATION_MIN <= saturation <= SATURATION_MAX:
        raise ValidationError(f"Saturation {saturation} must be between {SATURATION_MIN} and {SATURATION_MAX}")

def validate_color_temperature(attributes: Attributes, temperature: int):
    """
    The temperature must be within the range the device reports.
    The hub sends colorTemperatureMin as the warmer end, which is the larger kelvin value, so the
    bounds are compared without assuming an order.
    """
    _require_integer(temperature, "color temperature")
    if attributes.color_temperature_min is None or attributes.color_temperature_max is None:
        raise ValidationError("Device has no color temperature range declared")

    lower = min(attributes.color_temperature_min, attributes.color_temperature_max)
    upper = max(attributes.color_temperature_min, attributes.color_temperature_max)
    if not lower <= temperature <= upper:
        raise ValidationError(f"Color temperature {temperature} not within {lower} -> {upper}")

def _require_integer(value: Any, what: str):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{what.capitalize()} must be an integer, got {value!r}")

def _require_number(value: Any, what: str):
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        raise ValidationError(f"{what.capitalize()} must be a number, got {value!r}")

def _serialize_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value
