"""
Reads the flat TOML file holding the hub address and bearer token, as written when the token
was generated:

    ip-address = "192.168.1.10"
    token = "..."
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from ipaddress import AddressValueError, IPv4Address

from .const import DEFAULT_CONFIG_PATH
from .exceptions import ConfigError


@dataclass(frozen=True)
class Config:
    ip_address: IPv4Address
    token: str

def load_config(path: str = DEFAULT_CONFIG_PATH) -> Config:
    try:
        with open(path, "rb") as config_file:
            content = tomllib.load(config_file)
    except OSError as ex:
        raise ConfigError(f"Failed to open {path}: {ex}") from ex
    except tomllib.TOMLDecodeError as ex:
        raise ConfigError(f"Failed to parse {path}: {ex}") from ex

    try:
        ip_address = IPv4Address(content["ip-address"])
        token = content["token"]
    except KeyError as ex:
        raise ConfigError(f"Missing key {ex} in {path}") from ex
    except AddressValueError as ex:
        raise ConfigError(f"Invalid ip-address in {path}: {ex}") from ex

    if not isinstance(token, str) or not token:
        raise ConfigError(f"Token in {path} must be a non-empty string")

    return Config(ip_address, token)
