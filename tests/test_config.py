from ipaddress import IPv4Address

import pytest

from conftest import TEST_HUB_IP, TEST_TOKEN
from pydirigera.config import load_config
from pydirigera.exceptions import ConfigError


def _write_config(tmp_path, content):
    config_file = tmp_path / "config.toml"
    config_file.write_text(content)
    return str(config_file)


def test_load_config(tmp_path):
    path = _write_config(tmp_path, f'ip-address = "{TEST_HUB_IP}"\ntoken = "{TEST_TOKEN}"\n')

    config = load_config(path)

    assert config.ip_address == IPv4Address(TEST_HUB_IP)
    assert config.token == TEST_TOKEN

def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "nope.toml"))

@pytest.mark.parametrize("content", [
    'ip-address = "192.168.1.10"\ntoken = ',
    f'token = "{TEST_TOKEN}"\n',
    f'ip-address = "{TEST_HUB_IP}"\n',
    f'ip-address = "hub.local"\ntoken = "{TEST_TOKEN}"\n',
    f'ip-address = "{TEST_HUB_IP}"\ntoken = ""\n',
    f'ip-address = "{TEST_HUB_IP}"\ntoken = 42\n',
])
def test_invalid_config(tmp_path, content):
    with pytest.raises(ConfigError):
        load_config(_write_config(tmp_path, content))
