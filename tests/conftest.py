import pytest

TEST_HUB_IP = "192.168.1.10"
TEST_TOKEN = "test-token"
TEST_LIGHT_ID = "3b1a04db-9abe-4811-b60a-797970f51e8a_1"
TEST_OUTLET_ID = "5f6c2a1e-0c4d-4a56-8f3e-1d2b3c4d5e6f_1"
TEST_BLIND_ID = "8d2e4f6a-1b3c-4d5e-9f0a-2b4c6d8e0f1a_1"
TEST_SCENE_ID = "744173bf-f7d6-4f27-9dee-d7a2345ffe00"


def _common_attributes(name):
    return {
        "customName": name,
        "firmwareVersion": "1.0.21",
        "hardwareVersion": "1",
        "manufacturer": "IKEA of Sweden",
        "model": "TRADFRI bulb E27 CWS 806lm",
        "serialNumber": "ABCDEF0123456789",
        "productCode": "LED1924G9",
        "otaPolicy": "autoUpdate",
        "otaProgress": 0,
        "otaScheduleEnd": "00:00",
        "otaScheduleStart": "00:00",
        "otaState": "readyToCheck",
        "otaStatus": "upToDate",
    }

@pytest.fixture
def light_info():
    attributes = _common_attributes("Living room lamp")
    attributes.update({
        "isOn": True,
        "startupOnOff": "startPrevious",
        "lightLevel": 80,
        "colorMode": "temperature",
        "colorTemperature": 2700,
        "colorTemperatureMin": 4000,
        "colorTemperatureMax": 2202,
        "startupTemperature": -1,
        "colorHue": 30.5,
        "colorSaturation": 0.4,
        "circadianRhythmMode": "",
    })

    return {
        "id": TEST_LIGHT_ID,
        "type": "light",
        "deviceType": "light",
        "createdAt": "2023-10-29T13:37:02.000Z",
        "isReachable": True,
        "isHidden": False,
        "lastSeen": "2023-11-01T08:00:00.000Z",
        "room": {"id": "room-1", "name": "Living room", "color": "ikea_green_no_65", "icon": "rooms_sofa"},
        "attributes": attributes,
        "remoteLinks": [],
        "capabilities": {
            "canSend": [],
            "canReceive": ["customName", "isOn", "lightLevel", "colorTemperature", "colorHue", "colorSaturation"],
        },
        "deviceSet": [],
    }

@pytest.fixture
def outlet_info():
    attributes = _common_attributes("Coffee machine")
    attributes.update({"isOn": False, "startupOnOff": "startOff"})

    return {
        "id": TEST_OUTLET_ID,
        "type": "outlet",
        "deviceType": "outlet",
        "createdAt": "2023-10-29T13:40:00.000Z",
        "isReachable": True,
        "lastSeen": "2023-11-01T08:00:00.000Z",
        "attributes": attributes,
        "remoteLinks": ["remote-1"],
        "capabilities": {"canSend": [], "canReceive": ["customName", "isOn"]},
    }

@pytest.fixture
def blind_info():
    attributes = _common_attributes("Bedroom blind")
    attributes.update({"blindsCurrentLevel": 0, "blindsTargetLevel": 0, "blindsState": "stopped"})

    return {
        "id": TEST_BLIND_ID,
        "type": "blind",
        "deviceType": "blinds",
        "createdAt": "2023-10-29T13:45:00.000Z",
        "isReachable": True,
        "lastSeen": "2023-11-01T08:00:00.000Z",
        "attributes": attributes,
        "capabilities": {"canSend": [], "canReceive": ["customName", "blindsState"]},
    }

@pytest.fixture
def scene_info():
    return {
        "id": TEST_SCENE_ID,
        "type": "userScene",
        "info": {"name": "Evening", "icon": "scenes_cake"},
        "actions": [
            {
                "id": "action-1",
                "type": "device",
                "deviceId": TEST_LIGHT_ID,
                "attributes": {"isOn": True, "lightLevel": 40, "colorTemperature": 2202},
            },
            {
                "id": "action-2",
                "type": "device",
                "deviceId": TEST_OUTLET_ID,
                "attributes": {"isOn": False},
            },
        ],
        "commands": [],
        "triggers": [
            {"id": "trigger-1", "type": "app", "disabled": False, "triggeredAt": "2023-11-01T18:00:00.000Z"},
            {
                "id": "trigger-2",
                "type": "sunriseSunset",
                "disabled": False,
                "nextTriggerAt": "2023-11-02T15:51:00.000Z",
                "trigger": {"type": "sunset", "days": ["Mon", "Tue"], "offset": -30},
                "endTriggerEvent": {"type": "duration", "trigger": {"duration": 3600}},
            },
            {
                "id": "trigger-3",
                "type": "time",
                "disabled": True,
                "nextTriggerAt": "2023-11-02T06:30:00.000Z",
                "trigger": {"days": None, "time": "07:30"},
                "endTriggerEvent": {"type": "time", "trigger": {"time": "09:00"}},
            },
        ],
        "undoAllowedDuration": 30,
        "createdAt": "2023-10-30T20:00:00.000Z",
        "lastCompleted": "2023-11-01T18:00:01.000Z",
        "lastTriggered": "2023-11-01T18:00:00.000Z",
        "lastUndo": None,
    }
