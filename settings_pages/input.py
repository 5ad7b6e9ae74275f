"""Input settings: mouse, touchpad and keyboard configuration pages."""

from __future__ import annotations

import enum
import json
import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

from settings_pages.keyboard import (
    SPECIAL_CHARACTER_DIALOGUE_ID,
    InputSource,
    KeyboardPage,
    SpecialKey,
    default_input_sources,
    replace_special_option,
)
from settings_pages.page import Binder, Content, Info, Insert, Page
from settings_pages.section import Section

log = logging.getLogger(__name__)

COMP_CONFIG_NAME = "com.system76.CosmicComp"
APP_ID = "com.system76.CosmicSettings"
MAIN_WINDOW_ID = 0


def _fl(message: str, attribute: Optional[str] = None) -> str:
    return message if attribute is None else f"{message}.{attribute}"


# --- Configuration data ------------------------------------------------------


class AccelProfile(enum.Enum):
    """How pointer motion is accelerated."""

    FLAT = "Flat"
    ADAPTIVE = "Adaptive"


@dataclass
class AccelConfig:
    """Pointer acceleration profile and speed (from -1.0 to 1.0)."""

    profile: Optional[AccelProfile] = None
    speed: float = 0.0


@dataclass
class ScrollConfig:
    """Scrolling direction and speed."""

    natural_scroll: Optional[bool] = None
    scroll_factor: Optional[float] = None


@dataclass
class InputConfig:
    """Settings of a class of input devices."""

    acceleration: Optional[AccelConfig] = None
    left_handed: Optional[bool] = None
    scroll_config: Optional[ScrollConfig] = None

    def to_dict(self) -> dict[str, Any]:
        acceleration = None
        if self.acceleration is not None:
            profile = self.acceleration.profile
            acceleration = {
                "profile": None if profile is None else profile.value,
                "speed": self.acceleration.speed,
            }
        scroll = None
        if self.scroll_config is not None:
            scroll = {
                "natural_scroll": self.scroll_config.natural_scroll,
                "scroll_factor": self.scroll_config.scroll_factor,
            }
        return {
            "acceleration": acceleration,
            "left_handed": self.left_handed,
            "scroll_config": scroll,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InputConfig:
        acceleration = None
        acc = data.get("acceleration")
        if acc is not None:
            profile = acc.get("profile")
            acceleration = AccelConfig(
                profile=None if profile is None else AccelProfile(profile),
                speed=float(acc.get("speed", 0.0)),
            )
        scroll = None
        sc = data.get("scroll_config")
        if sc is not None:
            factor = sc.get("scroll_factor")
            natural = sc.get("natural_scroll")
            scroll = ScrollConfig(
                natural_scroll=None if natural is None else bool(natural),
                scroll_factor=None if factor is None else float(factor),
            )
        left_handed = data.get("left_handed")
        return cls(
            acceleration=acceleration,
            left_handed=None if left_handed is None else bool(left_handed),
            scroll_config=scroll,
        )


@dataclass
class XkbConfig:
    """Keyboard layout configuration."""

    rules: str = ""
    model: str = ""
    layout: str = ""
    variant: str = ""
    options: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rules": self.rules,
            "model": self.model,
            "layout": self.layout,
            "variant": self.variant,
            "options": self.options,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> XkbConfig:
        options = data.get("options")
        return cls(
            rules=str(data.get("rules", "")),
            model=str(data.get("model", "")),
            layout=str(data.get("layout", "")),
            variant=str(data.get("variant", "")),
            options=None if options is None else str(options),
        )


class ConfigStore:
    """A versioned configuration namespace storing one JSON file per key."""

    def __init__(self, name: str, version: int, root: Union[str, os.PathLike, None] = None) -> None:
        if root is None:
            base = os.environ.get("XDG_CONFIG_HOME")
            root = Path(base) if base else Path.home() / ".config"
        self.directory = Path(root) / "settings_pages" / name / f"v{version}"

    def get(self, key: str, factory: Callable[[], Any]) -> Any:
        """The stored value of ``key``, or ``factory()`` if it is missing or invalid."""
        try:
            data = json.loads((self.directory / key).read_text(encoding="utf-8"))
            from_dict = getattr(factory, "from_dict", None)
            return data if from_dict is None else from_dict(data)
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as err:
            log.error("Failed to read config '%s': %s", key, err)
            return factory()

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``; raises OSError if it cannot be written."""
        to_dict = getattr(value, "to_dict", None)
        data = value if to_dict is None else to_dict()
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / key
        temporary = target.with_name(f".{key}.tmp")
        temporary.write_text(json.dumps(data), encoding="utf-8")
        os.replace(temporary, target)


# --- Widgets' state ----------------------------------------------------------


@dataclass
class PrimaryButtonModel:
    """Choice of the primary mouse button: position 0 is left, 1 is right."""

    labels: tuple[str, ...] = (
        _fl("mouse", "primary-button-left"),
        _fl("mouse", "primary-button-right"),
    )
    active: int = 0

    def activate(self, position: int) -> None:
        if not 0 <= position < len(self.labels):
            raise IndexError(f"no button at position {position}")
        self.active = position


_MESSAGE_KINDS = frozenset(
    {
        "set_acceleration",
        "set_natural_scroll",
        "set_scroll_factor",
        "set_double_click_speed",
        "set_mouse_speed",
        "primary_button_selected",
        "expand_input_source_popover",
        "open_special_character_dialog",
        "close_special_character_dialog",
        "special_character_select",
    }
)


@dataclass(frozen=True)
class InputMessage:
    """A change requested on the input pages.

    ``touchpad`` chooses the touchpad's settings instead of the default ones
    for messages that concern a device.
    """

    kind: str
    value: Any = None
    touchpad: bool = False

    def __post_init__(self) -> None:
        if self.kind not in _MESSAGE_KINDS:
            raise ValueError(f"unknown input message: {self.kind!r}")


@dataclass(frozen=True)
class WindowRequest:
    """A request to open or close a dialog window."""

    action: str
    window_id: int
    title: Optional[str] = None
    app_id: Optional[str] = None
    parent: Optional[int] = None
    size: Optional[tuple[int, int]] = None
    min_size: Optional[tuple[float, float]] = None
    max_size: Optional[tuple[float, float]] = None


# --- Slider conversions ------------------------------------------------------


def speed_to_slider(speed: float) -> float:
    """Map an acceleration speed in [-1, 1] onto the slider's [0, 100]."""
    return (speed + 1.0) * 50.0


def slider_to_speed(value: float) -> float:
    return value / 50.0 - 1.0


def scroll_factor_to_slider(factor: float) -> float:
    """Map a scroll factor onto the slider, 1.0 sitting in the middle."""
    return math.log2(factor) * 10.0 + 50.0


def slider_to_scroll_factor(value: float) -> float:
    return 2.0 ** ((value - 50.0) / 10.0)


# --- Pages -------------------------------------------------------------------


class InputPage(Page):
    """Parent page of keyboard, mouse and touchpad; holds their state."""

    def __init__(self, config: Optional[ConfigStore] = None) -> None:
        self.config = config if config is not None else ConfigStore(COMP_CONFIG_NAME, 1)
        self.input_default: InputConfig = self.config.get("input-default", InputConfig)
        self.input_touchpad: InputConfig = self.config.get("input-touchpad", InputConfig)
        self.xkb: XkbConfig = self.config.get("xkb-config", XkbConfig)

        self.primary_button = PrimaryButtonModel()
        self.primary_button.activate(1 if self.input_default.left_handed else 0)
        self.touchpad_primary_button = PrimaryButtonModel()
        self.touchpad_primary_button.activate(1 if self.input_touchpad.left_handed else 0)

        self.expanded_source_popover: Optional[str] = None
        self.sources: list[InputSource] = default_input_sources()
        self.special_character_dialog: Optional[SpecialKey] = None

    def info(self) -> Info:
        return Info(
            "input",
            "input-keyboard-symbolic",
            title=_fl("input"),
            description=_fl("input", "desc"),
        )

    @classmethod
    def sub_pages(cls, insert: Insert) -> Insert:
        return insert.sub_page(KeyboardPage).sub_page(MousePage).sub_page(TouchpadPage)

    def _update_input(self, touchpad: bool, change: Callable[[InputConfig], None]) -> None:
        name, config = (
            ("input-touchpad", self.input_touchpad)
            if touchpad
            else ("input-default", self.input_default)
        )
        change(config)
        try:
            self.config.set(name, config)
        except OSError as err:
            log.error("Failed to set config '%s': %s", name, err)

    def update(self, message: InputMessage) -> Optional[WindowRequest]:
        """Apply a message; returns a window request for the dialogs."""
        kind, value, touchpad = message.kind, message.value, message.touchpad

        if kind == "set_acceleration":
            profile = AccelProfile.ADAPTIVE if value else AccelProfile.FLAT

            def change(config: InputConfig) -> None:
                if config.acceleration is None:
                    config.acceleration = AccelConfig()
                config.acceleration.profile = profile

            self._update_input(touchpad, change)
        elif kind == "set_natural_scroll":

            def change(config: InputConfig) -> None:
                if config.scroll_config is None:
                    config.scroll_config = ScrollConfig()
                config.scroll_config.natural_scroll = value

            self._update_input(touchpad, change)
        elif kind == "set_scroll_factor":

            def change(config: InputConfig) -> None:
                if config.scroll_config is None:
                    config.scroll_config = ScrollConfig()
                config.scroll_config.scroll_factor = value

            self._update_input(touchpad, change)
        elif kind == "set_double_click_speed":
            pass
        elif kind == "set_mouse_speed":

            def change(config: InputConfig) -> None:
                if config.acceleration is None:
                    config.acceleration = AccelConfig()
                config.acceleration.speed = value

            self._update_input(touchpad, change)
        elif kind == "primary_button_selected":
            model = self.touchpad_primary_button if touchpad else self.primary_button
            model.activate(value)
            left_handed = model.active == 1

            def change(config: InputConfig) -> None:
                config.left_handed = left_handed

            self._update_input(touchpad, change)
        elif kind == "expand_input_source_popover":
            self.expanded_source_popover = value
        elif kind == "open_special_character_dialog":
            self.special_character_dialog = value
            return WindowRequest(
                action="open",
                window_id=SPECIAL_CHARACTER_DIALOGUE_ID,
                title=value.title(),
                app_id=APP_ID,
                parent=MAIN_WINDOW_ID,
                size=(512, 420),
                min_size=(300.0, 200.0),
                max_size=(800.0, 1080.0),
            )
        elif kind == "close_special_character_dialog":
            self.special_character_dialog = None
            return WindowRequest(action="close", window_id=SPECIAL_CHARACTER_DIALOGUE_ID)
        elif kind == "special_character_select":
            special_key = self.special_character_dialog
            if special_key is not None:
                self.xkb.options = replace_special_option(self.xkb.options, special_key, value)
                try:
                    self.config.set("xkb-config", self.xkb)
                except OSError as err:
                    log.error("Failed to set config 'xkb-config': %s", err)
        return None


# --- Mouse and touchpad views ------------------------------------------------


def _input_page(binder: Binder) -> InputPage:
    page = binder.page(InputPage)
    if page is None:
        raise LookupError("input page not found")
    return page


def _item(title: str, control: Any, description: Optional[str] = None) -> dict[str, Any]:
    return {"kind": "item", "title": title, "description": description, "control": control}


def _slider(low: float, high: float, value: float, on_change: Callable[[Any], Any]) -> dict[str, Any]:
    return {"kind": "slider", "range": (low, high), "value": value, "on_change": on_change}


def _toggler(value: bool, on_toggle: Callable[[bool], Any]) -> dict[str, Any]:
    return {"kind": "toggler", "value": value, "on_toggle": on_toggle}


def _device_section(prefix: str, page_type: type, touchpad: bool) -> Section:
    def view(binder: Binder, page: Page, section: Section) -> dict[str, Any]:
        desc = section.descriptions
        state = _input_page(binder)
        config = state.input_touchpad if touchpad else state.input_default
        model = state.touchpad_primary_button if touchpad else state.primary_button
        acceleration = config.acceleration
        speed = 0.0 if acceleration is None else acceleration.speed
        adaptive = acceleration is None or acceleration.profile is AccelProfile.ADAPTIVE
        items = [
            _item(
                desc[0],
                {
                    "kind": "segmented_selection",
                    "model": model,
                    "on_activate": lambda pos: InputMessage(
                        "primary_button_selected", pos, touchpad
                    ),
                },
            ),
            _item(
                desc[1],
                _slider(
                    0.0,
                    100.0,
                    speed_to_slider(speed),
                    lambda v: InputMessage("set_mouse_speed", slider_to_speed(v), touchpad),
                ),
            ),
            _item(
                desc[2],
                _toggler(adaptive, lambda on: InputMessage("set_acceleration", on, touchpad)),
                description=desc[3],
            ),
            _item(
                desc[4],
                _slider(
                    0,
                    100,
                    0,
                    lambda v: InputMessage("set_double_click_speed", v, touchpad),
                ),
                description=desc[5],
            ),
        ]
        return {"kind": "section", "title": section.title, "items": items}

    return Section(
        descriptions=[
            _fl(prefix, "primary-button"),
            _fl(prefix, "speed"),
            _fl(prefix, "acceleration"),
            _fl(prefix, "acceleration-desc"),
            _fl(prefix, "double-click-speed"),
            _fl(prefix, "double-click-speed-desc"),
        ],
    ).view(page_type, view)


def _scrolling_section(page_type: type, touchpad: bool) -> Section:
    def view(binder: Binder, page: Page, section: Section) -> dict[str, Any]:
        desc = section.descriptions
        state = _input_page(binder)
        scroll = (state.input_touchpad if touchpad else state.input_default).scroll_config
        factor = 1.0
        natural = False
        if scroll is not None:
            if scroll.scroll_factor is not None:
                factor = scroll.scroll_factor
            if scroll.natural_scroll is not None:
                natural = scroll.natural_scroll
        items = [
            _item(
                desc[0],
                _slider(
                    1.0,
                    100.0,
                    scroll_factor_to_slider(factor),
                    lambda v: InputMessage(
                        "set_scroll_factor", slider_to_scroll_factor(v), touchpad
                    ),
                ),
            ),
            _item(
                desc[1],
                _toggler(natural, lambda on: InputMessage("set_natural_scroll", on, touchpad)),
                description=desc[2],
            ),
        ]
        return {"kind": "section", "title": section.title, "items": items}

    return Section(
        title=_fl("mouse-scrolling"),
        descriptions=[
            _fl("mouse-scrolling", "speed"),
            _fl("mouse-scrolling", "natural"),
            _fl("mouse-scrolling", "natural-desc"),
        ],
    ).view(page_type, view)


class MousePage(Page):
    """Mouse buttons, speed, acceleration and scrolling."""

    def content(self, sections) -> Content:
        return [
            sections.insert(_device_section("mouse", MousePage, False)),
            sections.insert(_scrolling_section(MousePage, False)),
        ]

    def info(self) -> Info:
        return Info(
            "mouse",
            "input-mouse-symbolic",
            title=_fl("mouse"),
            description=_fl("mouse", "desc"),
        )


class TouchpadPage(Page):
    """Touchpad buttons, speed, acceleration and scrolling."""

    def content(self, sections) -> Content:
        return [
            sections.insert(_device_section("touchpad", TouchpadPage, True)),
            sections.insert(_scrolling_section(TouchpadPage, True)),
        ]

    def info(self) -> Info:
        return Info(
            "touchpad",
            "input-touchpad-symbolic",
            title=_fl("touchpad"),
            description=_fl("touchpad", "desc"),
        )