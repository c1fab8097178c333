import math

import pytest

from conftest import TEST_HUB_IP, TEST_LIGHT_ID, TEST_SCENE_ID, TEST_TOKEN
from pydirigera.devices import Startup, create_device
from pydirigera.exceptions import ValidationError
from pydirigera.management import request_builder
from pydirigera.management.request_builder import HubEndpoint

ENDPOINT = HubEndpoint(TEST_HUB_IP, TEST_TOKEN)
BASE_URL = f"https://{TEST_HUB_IP}:8443"


def test_build_path():
    assert request_builder.build_path("devices") == "/v1/devices"
    assert request_builder.build_path("devices", TEST_LIGHT_ID) == f"/v1/devices/{TEST_LIGHT_ID}"
    assert request_builder.build_path("scenes", TEST_SCENE_ID, "trigger") == f"/v1/scenes/{TEST_SCENE_ID}/trigger"

def test_read_requests_have_no_body():
    request = request_builder.build_devices_request(ENDPOINT)

    assert request.method == "GET"
    assert request.url == f"{BASE_URL}/v1/devices"
    assert request.body is None
    assert request.headers == {
        "Authorization": f"Bearer {TEST_TOKEN}",
        "User-Agent": "pydirigera/0.1.0",
    }

def test_single_entity_requests():
    assert request_builder.build_device_request(ENDPOINT, TEST_LIGHT_ID).path == f"/v1/devices/{TEST_LIGHT_ID}"
    assert request_builder.build_scenes_request(ENDPOINT).path == "/v1/scenes"
    assert request_builder.build_scene_request(ENDPOINT, TEST_SCENE_ID).path == f"/v1/scenes/{TEST_SCENE_ID}"

@pytest.mark.parametrize("builder, action", [
    (request_builder.build_scene_trigger_request, "trigger"),
    (request_builder.build_scene_undo_request, "undo"),
])
def test_scene_actions_post_without_body(builder, action):
    request = builder(ENDPOINT, TEST_SCENE_ID)

    assert request.method == "POST"
    assert request.path == f"/v1/scenes/{TEST_SCENE_ID}/{action}"
    assert request.body is None
    assert "Content-Type" not in request.headers

def test_patch_wraps_attributes_in_single_element_list():
    request = request_builder.build_device_patch_request(
        ENDPOINT, TEST_LIGHT_ID, {"color_hue": 120.0, "color_saturation": 0.5})

    assert request.method == "PATCH"
    assert request.url == f"{BASE_URL}/v1/devices/{TEST_LIGHT_ID}"
    assert request.body == b'[{"attributes":{"colorHue":120.0,"colorSaturation":0.5}}]'
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["Authorization"] == f"Bearer {TEST_TOKEN}"

def test_patch_serializes_enums_by_wire_value():
    request = request_builder.build_device_patch_request(ENDPOINT, TEST_LIGHT_ID, {"startup_on_off": Startup.START_ON})

    assert request.body == b'[{"attributes":{"startupOnOff":"startOn"}}]'

@pytest.mark.parametrize("level", [0, 1, 50, 100])
def test_light_level_in_range(level):
    request_builder.validate_light_level(level)

@pytest.mark.parametrize("level", [-1, 101, 255, True, 50.5])
def test_light_level_out_of_range(level):
    with pytest.raises(ValidationError):
        request_builder.validate_light_level(level)

@pytest.mark.parametrize("hue, saturation", [(0, 0), (0.0, 1.0), (359.999, 0.5), (180, 1)])
def test_hue_saturation_in_range(hue, saturation):
    request_builder.validate_hue_saturation(hue, saturation)

@pytest.mark.parametrize("hue, saturation", [(360, 0.5), (-0.1, 0.5), (10, 1.01), (10, -0.01), (math.nan, 0.5), (10, "0.5")])
def test_hue_saturation_out_of_range(hue, saturation):
    with pytest.raises(ValidationError):
        request_builder.validate_hue_saturation(hue, saturation)

def test_target_level_range():
    request_builder.validate_target_level(0)
    request_builder.validate_target_level(100)
    with pytest.raises(ValidationError):
        request_builder.validate_target_level(101)

def test_color_temperature_range_in_either_order(light_info):
    attributes = create_device(light_info).attributes

    request_builder.validate_color_temperature(attributes, 2202)
    request_builder.validate_color_temperature(attributes, 4000)
    with pytest.raises(ValidationError):
        request_builder.validate_color_temperature(attributes, 4001)
    with pytest.raises(ValidationError):
        request_builder.validate_color_temperature(attributes, 2201)

def test_color_temperature_without_declared_range(light_info):
    del light_info["attributes"]["colorTemperatureMax"]
    attributes = create_device(light_info).attributes

    with pytest.raises(ValidationError, match="no color temperature range"):
        request_builder.validate_color_temperature(attributes, 3000)

def test_action_without_id_is_refused():
    with pytest.raises(ValueError):
        request_builder.build_path("scenes", action="trigger")
