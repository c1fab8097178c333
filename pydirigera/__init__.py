"""Python library for the local REST API of the IKEA Dirigera hub."""

from .config import Config, load_config
from .devices import (
    Attributes,
    Blind,
    Capabilities,
    Controller,
    Device,
    DeviceData,
    Gateway,
    Light,
    Outlet,
    Room,
    Sensor,
    Startup,
    create_device,
)
from .exceptions import (
    AttributeNotApplicableError,
    ConfigError,
    DecodeError,
    DirigeraError,
    ProtocolError,
    TransportError,
    UnsupportedCapabilityError,
    ValidationError,
)
from .hub import Hub, HubCommands
from .management.command import CommandState, DeviceCommand
from .management.request_builder import HubRequest
from .management.response_parser import HubResponse
from .management.transport import AiohttpTransport, Transport
from .mappings.capabilities import Capability, can_accept
from .mappings.device_types import DeviceKind, DeviceType
from .scenes import Scene, SceneData, UserScene, create_scene

__version__ = "0.1.0"

__all__ = [
    "AiohttpTransport",
    "Attributes",
    "AttributeNotApplicableError",
    "Blind",
    "Capabilities",
    "Capability",
    "CommandState",
    "Config",
    "ConfigError",
    "Controller",
    "DecodeError",
    "Device",
    "DeviceCommand",
    "DeviceData",
    "DeviceKind",
    "DeviceType",
    "DirigeraError",
    "Gateway",
    "Hub",
    "HubCommands",
    "HubRequest",
    "HubResponse",
    "Light",
    "Outlet",
    "ProtocolError",
    "Room",
    "Scene",
    "SceneData",
    "Sensor",
    "Startup",
    "Transport",
    "TransportError",
    "UnsupportedCapabilityError",
    "UserScene",
    "ValidationError",
    "can_accept",
    "create_device",
    "create_scene",
    "load_config",
    "__version__",
]
