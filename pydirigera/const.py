DIRIGERA_PORT = 8443
DIRIGERA_API_VERSION = "v1"

USER_AGENT = "pydirigera/0.1.0"
JSON_CONTENT_TYPE = "application/json"

DEVICES_RESOURCE = "devices"
SCENES_RESOURCE = "scenes"

SCENE_TRIGGER_ACTION = "trigger"
SCENE_UNDO_ACTION = "undo"

DEFAULT_CONFIG_PATH = "config.toml"
