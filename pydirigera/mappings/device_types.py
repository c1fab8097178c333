from enum import Enum

class DeviceKind(Enum):
    """The `type` tag the hub uses to pick a device variant."""
    BLIND = "blind"
    CONTROLLER = "controller"
    GATEWAY = "gateway"
    LIGHT = "light"
    OUTLET = "outlet"
    SENSOR = "sensor"

class DeviceType(Enum):
    """
    The `deviceType` the hub declares for a device.
    It does not always agree with the DeviceKind, so both are kept.
    """
    LIGHT_CONTROLLER = "lightController"
    LIGHT = "light"
    GATEWAY = "gateway"
    MOTION_SENSOR = "motionSensor"
    OUTLET = "outlet"
    BLINDS = "blinds"
    ENVIRONMENT_SENSOR = "environmentSensor"
    OPEN_CLOSE_SENSOR = "openCloseSensor"
    UNKNOWN = "unknown"

DEVICE_TYPES = {device_type.value: device_type for device_type in DeviceType if device_type is not DeviceType.UNKNOWN}
