"""
Scenes are stored configurations for a set of devices, such as light level or color temperature.
They can be triggered from the app or API, or on a schedule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .exceptions import DecodeError
from .management.parser_utils import (
    TimestampMode,
    ensure_list,
    ensure_object,
    get_string_list,
    get_value,
    parse_timestamp,
)


class SceneKind(Enum):
    USER_SCENE = "userScene"

class SunEvent(Enum):
    SUNRISE = "sunrise"
    SUNSET = "sunset"

def create_scene(scene_info: dict[str, Any]) -> Scene:
    """Builds the scene variant matching the record's `type` tag."""
    scene_info = ensure_object(scene_info, "scene")
    kind = get_value(scene_info, "type", SceneKind)
    data = SceneData.from_api(scene_info)

    match kind:
        case SceneKind.USER_SCENE:
            return UserScene(data)


@dataclass
class Follow:
    """Follows sunrise or sunset, offset by a signed number of minutes, optionally on specific days only."""

    event: SunEvent
    offset: int
    days: list[str] | None = None

    @classmethod
    def from_api(cls, data: Any) -> Follow:
        data = ensure_object(data, "sunrise/sunset trigger")
        return cls(
            event=get_value(data, "type", SunEvent),
            offset=get_value(data, "offset", int),
            days=get_string_list(data, "days"),
        )


@dataclass
class TimeOfDay:
    time: str
    days: list[str] | None = None

    @classmethod
    def from_api(cls, data: Any) -> TimeOfDay:
        data = ensure_object(data, "time trigger")
        return cls(time=get_value(data, "time", str), days=get_string_list(data, "days"))


@dataclass
class DurationEndTrigger:
    """Ends the scene a number of seconds after it started."""
    duration: int

@dataclass
class SunriseSunsetEndTrigger:
    follow: Follow

@dataclass
class TimeEndTrigger:
    time: TimeOfDay

EndTrigger = DurationEndTrigger | SunriseSunsetEndTrigger | TimeEndTrigger


def parse_end_trigger(data: Any) -> EndTrigger:
    data = ensure_object(data, "end trigger")
    end_type = get_value(data, "type", str)
    content = data.get("trigger")

    match end_type:
        case "duration":
            content = ensure_object(content, "duration end trigger")
            return DurationEndTrigger(duration=get_value(content, "duration", int))
        case "sunriseSunset":
            return SunriseSunsetEndTrigger(follow=Follow.from_api(content))
        case "time":
            return TimeEndTrigger(time=TimeOfDay.from_api(content))
        case _:
            raise DecodeError(f"Unknown end trigger type '{end_type}'")


@dataclass
class AppTrigger:
    """Triggered from the app or the API."""

    id: str
    disabled: bool
    triggered_at: datetime | None = None

@dataclass
class SunriseSunsetTrigger:
    id: str
    disabled: bool
    trigger: Follow
    next_trigger_at: datetime | None = None
    end_trigger_event: EndTrigger | None = None

@dataclass
class TimeTrigger:
    id: str
    disabled: bool
    trigger: TimeOfDay
    next_trigger_at: datetime | None = None
    end_trigger_event: EndTrigger | None = None

Trigger = AppTrigger | SunriseSunsetTrigger | TimeTrigger


def parse_trigger(data: Any) -> Trigger:
    data = ensure_object(data, "trigger")
    trigger_type = get_value(data, "type", str)
    trigger_id = get_value(data, "id", str)
    disabled = get_value(data, "disabled", bool)

    match trigger_type:
        case "app":
            return AppTrigger(
                id=trigger_id,
                disabled=disabled,
                triggered_at=parse_timestamp(data, "triggeredAt", TimestampMode.OPTIONAL),
            )
        case "sunriseSunset":
            return SunriseSunsetTrigger(
                id=trigger_id,
                disabled=disabled,
                trigger=Follow.from_api(data.get("trigger")),
                next_trigger_at=_parse_next_trigger_at(data),
                end_trigger_event=_parse_optional_end_trigger(data),
            )
        case "time":
            return TimeTrigger(
                id=trigger_id,
                disabled=disabled,
                trigger=TimeOfDay.from_api(data.get("trigger")),
                next_trigger_at=_parse_next_trigger_at(data),
                end_trigger_event=_parse_optional_end_trigger(data),
            )
        case _:
            raise DecodeError(f"Unknown trigger type '{trigger_type}'")


@dataclass
class SceneAttributes:
    """The partial set of attributes a scene applies to a device."""

    is_on: bool | None = None
    light_level: int | None = None
    color_temperature: int | None = None

    @classmethod
    def from_api(cls, data: Any) -> SceneAttributes:
        data = ensure_object(data, "scene attributes")
        return cls(
            is_on=get_value(data, "isOn", bool, required=False),
            light_level=get_value(data, "lightLevel", int, required=False),
            color_temperature=get_value(data, "colorTemperature", int, required=False),
        )


@dataclass
class Action:
    id: str
    device_id: str
    attributes: SceneAttributes

    @classmethod
    def from_api(cls, data: Any) -> Action:
        data = ensure_object(data, "action")
        action_type = get_value(data, "type", str)
        if action_type != "device":
            raise DecodeError(f"Unknown action type '{action_type}'")

        return cls(
            id=get_value(data, "id", str),
            device_id=get_value(data, "deviceId", str),
            attributes=SceneAttributes.from_api(data.get("attributes")),
        )


@dataclass
class Info:
    name: str
    icon: str

    @classmethod
    def from_api(cls, data: Any) -> Info:
        data = ensure_object(data, "info")
        return cls(name=get_value(data, "name", str), icon=get_value(data, "icon", str))


@dataclass
class SceneData:
    """What a scene does and when it is triggered."""

    id: str
    info: Info
    actions: list[Action]
    triggers: list[Trigger]
    undo_allowed_duration: int
    created_at: datetime
    scene_type: str | None = None
    commands: list[str] = field(default_factory=list)
    last_completed: datetime | None = None
    last_triggered: datetime | None = None
    last_undo: datetime | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> SceneData:
        actions = ensure_list(data.get("actions"), "actions")
        triggers = ensure_list(data.get("triggers"), "triggers")

        return cls(
            id=get_value(data, "id", str),
            info=Info.from_api(data.get("info")),
            actions=[Action.from_api(action) for action in actions],
            triggers=[parse_trigger(trigger) for trigger in triggers],
            undo_allowed_duration=get_value(data, "undoAllowedDuration", int),
            created_at=parse_timestamp(data, "createdAt", TimestampMode.REQUIRED),
            scene_type=get_value(data, "sceneType", str, required=False),
            commands=get_string_list(data, "commands") or [],
            last_completed=parse_timestamp(data, "lastCompleted", TimestampMode.OPTIONAL),
            last_triggered=parse_timestamp(data, "lastTriggered", TimestampMode.OPTIONAL),
            last_undo=parse_timestamp(data, "lastUndo", TimestampMode.OPTIONAL),
        )


class Scene:
    kind: SceneKind

    def __init__(self, data: SceneData):
        self._data = data

    @property
    def data(self) -> SceneData:
        """The shared record, regardless of the scene kind."""
        return self._data

    @property
    def id(self) -> str:
        return self._data.id

    @property
    def name(self) -> str:
        return self._data.info.name

    def replace(self, other: Scene):
        """Replaces the whole record with a freshly fetched copy of the same scene."""
        if type(other) is not type(self) or other.id != self.id:
            raise DecodeError(f"Reloaded scene {other.id} does not match scene {self.id}")

        self._data = other.data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scene):
            return NotImplemented
        return type(other) is type(self) and other.data == self._data

    def __hash__(self) -> int:
        return hash((type(self), self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, name={self.name!r})"


class UserScene(Scene):
    kind = SceneKind.USER_SCENE


def _parse_next_trigger_at(data: dict[str, Any]) -> datetime | None:
    # absent is allowed, malformed is not
    if data.get("nextTriggerAt") is None:
        return None
    return parse_timestamp(data, "nextTriggerAt", TimestampMode.REQUIRED)

def _parse_optional_end_trigger(data: dict[str, Any]) -> EndTrigger | None:
    end_trigger = data.get("endTriggerEvent")
    return parse_end_trigger(end_trigger) if end_trigger is not None else None
