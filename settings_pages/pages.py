"""Sound, system, time and networking pages of the settings panel."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from settings_pages.about import SystemInfo
from settings_pages.page import Binder, Content, Entity, Info, Insert, Page
from settings_pages.section import Section

_PLACEHOLDER = "Unavailable"


def _fl(message: str, attribute: Optional[str] = None) -> str:
    """Identifier of a localised message, used as its displayed text."""
    return message if attribute is None else f"{message}.{attribute}"


def _text(text: str) -> dict[str, Any]:
    return {"kind": "text", "text": text}


def _space() -> dict[str, Any]:
    return {"kind": "horizontal_space"}


def _toggler(value: bool, on_toggle: Callable[[bool], Any]) -> dict[str, Any]:
    return {"kind": "toggler", "value": value, "on_toggle": on_toggle}


def _item(title: str, control: Any, description: Optional[str] = None) -> dict[str, Any]:
    return {"kind": "item", "title": title, "description": description, "control": control}


def _view_section(title: str, items: list[Any]) -> dict[str, Any]:
    return {"kind": "section", "title": title, "items": items}


def _placeholder_section(section: Section, count: int) -> dict[str, Any]:
    items = [_item(text, _text(_PLACEHOLDER)) for text in section.descriptions[:count]]
    return _view_section(section.title, items)


# --- Sound -------------------------------------------------------------------


class SoundPage(Page):
    """Sound output, input, alerts and per-application volume."""

    def content(self, sections) -> Content:
        return [
            sections.insert(_sound_output()),
            sections.insert(_sound_input()),
            sections.insert(_sound_alerts()),
            sections.insert(_sound_applications()),
        ]

    def info(self) -> Info:
        return Info(
            "sound",
            "multimedia-volume-control-symbolic",
            title=_fl("sound"),
            description=_fl("sound", "desc"),
        )


def _sound_alerts() -> Section:
    return Section(
        title=_fl("sound-alerts"),
        descriptions=[_fl("sound-alerts", "volume"), _fl("sound-alerts", "sound")],
    ).view(SoundPage, lambda binder, page, section: _placeholder_section(section, 2))


def _sound_applications() -> Section:
    return Section(
        title=_fl("sound-applications"),
        descriptions=[_fl("sound-applications", "desc")],
    ).view(SoundPage, lambda binder, page, section: _placeholder_section(section, 1))


def _sound_input() -> Section:
    return Section(
        title=_fl("sound-input"),
        descriptions=[
            _fl("sound-input", "volume"),
            _fl("sound-input", "device"),
            _fl("sound-input", "level"),
        ],
    ).view(SoundPage, lambda binder, page, section: _placeholder_section(section, 3))


def _sound_output() -> Section:
    return Section(
        title=_fl("sound-output"),
        descriptions=[
            _fl("sound-output", "volume"),
            _fl("sound-output", "device"),
            _fl("sound-output", "level"),
            _fl("sound-output", "config"),
            _fl("sound-output", "balance"),
        ],
    ).view(SoundPage, lambda binder, page, section: _placeholder_section(section, 4))


# --- System ------------------------------------------------------------------


class SystemPage(Page):
    """Parent page of users, about and firmware."""

    def info(self) -> Info:
        return Info("system", "system-users-symbolic", title=_fl("system"))

    @classmethod
    def sub_pages(cls, insert: Insert) -> Insert:
        return insert.sub_page(UsersPage).sub_page(AboutPage).sub_page(FirmwarePage)


@dataclass
class AboutPage(Page):
    """Facts about the device, its hardware and operating system."""

    system: SystemInfo = field(default_factory=SystemInfo)

    def content(self, sections) -> Content:
        return [
            sections.insert(_about_distributor_logo()),
            sections.insert(_about_device()),
            sections.insert(_about_hardware()),
            sections.insert(_about_os()),
            sections.insert(_about_related()),
        ]

    def info(self) -> Info:
        return Info(
            "about",
            "help-about-symbolic",
            title=_fl("about"),
            description=_fl("about", "desc"),
        )

    def load(self, page: Entity):
        return self._load_system_info()

    @staticmethod
    async def _load_system_info() -> SystemInfo:
        return await asyncio.to_thread(SystemInfo.load)

    def update(self, info: SystemInfo) -> None:
        """Replace the shown system information."""
        self.system = info


def _about_device() -> Section:
    def view(binder: Binder, page: AboutPage, section: Section) -> dict[str, Any]:
        desc = section.descriptions
        device_name = _item(desc[0], _text(page.system.device_name), description=desc[1])
        return {"kind": "list_column", "items": [device_name]}

    return Section(
        descriptions=[_fl("about-device"), _fl("about-device", "desc")],
    ).view(AboutPage, view)


def _about_distributor_logo() -> Section:
    def view(binder: Binder, page: AboutPage, section: Section) -> dict[str, Any]:
        return {
            "kind": "row",
            "padding": (0, 16, 0, 16),
            "children": [
                _space(),
                {"kind": "icon", "name": "distributor-logo", "size": 78},
                _space(),
            ],
        }

    return Section(search_ignore=True).view(AboutPage, view)


def _about_hardware() -> Section:
    def view(binder: Binder, page: AboutPage, section: Section) -> dict[str, Any]:
        desc = section.descriptions
        system = page.system
        items = [
            _item(desc[0], _text(system.hardware_model)),
            _item(desc[1], _text(system.memory)),
            _item(desc[2], _text(system.processor)),
        ]
        items.extend(_item(desc[3], _text(card)) for card in system.graphics)
        items.append(_item(desc[4], _text(system.disk_capacity)))
        return _view_section(section.title, items)

    return Section(
        title=_fl("about-hardware"),
        descriptions=[
            _fl("about-hardware", "model"),
            _fl("about-hardware", "memory"),
            _fl("about-hardware", "processor"),
            _fl("about-hardware", "graphics"),
            _fl("about-hardware", "disk-capacity"),
        ],
    ).view(AboutPage, view)


def _about_os() -> Section:
    def view(binder: Binder, page: AboutPage, section: Section) -> dict[str, Any]:
        desc = section.descriptions
        system = page.system
        return _view_section(
            section.title,
            [
                _item(desc[0], _text(system.operating_system)),
                _item(desc[1], _text(system.os_architecture)),
                _item(desc[2], _text(system.desktop_environment)),
                _item(desc[3], _text(system.windowing_system)),
            ],
        )

    return Section(
        title=_fl("about-os"),
        descriptions=[
            _fl("about-os", "os"),
            _fl("about-os", "os-architecture"),
            _fl("about-os", "desktop-environment"),
            _fl("about-os", "windowing-system"),
        ],
    ).view(AboutPage, view)


def _about_related() -> Section:
    return Section(
        title=_fl("about-related"),
        descriptions=[_fl("about-related", "support")],
    ).view(AboutPage, lambda binder, page, section: _placeholder_section(section, 1))


class FirmwarePage(Page):
    """Firmware updates."""

    def content(self, sections) -> Content:
        return [sections.insert(Section())]

    def info(self) -> Info:
        return Info(
            "firmware",
            "firmware-manager-symbolic",
            title=_fl("firmware"),
            description=_fl("firmware", "desc"),
        )


class UsersPage(Page):
    """User accounts."""

    def content(self, sections) -> Content:
        return [sections.insert(Section())]

    def info(self) -> Info:
        return Info(
            "users",
            "system-users-symbolic",
            title=_fl("users"),
            description=_fl("users", "desc"),
        )


# --- Time --------------------------------------------------------------------


class TimePage(Page):
    """Parent page of date & time and region."""

    def info(self) -> Info:
        return Info(
            "time",
            "preferences-system-time-symbolic",
            title=_fl("time"),
            description=_fl("time", "desc"),
        )

    @classmethod
    def sub_pages(cls, insert: Insert) -> Insert:
        return insert.sub_page(DatePage).sub_page(RegionPage)


_DATE_SETTINGS = {
    "automatic": "auto",
    "automatic_timezone": "auto_timezone",
    "military_time": "military_time",
}


@dataclass(frozen=True)
class DateMessage:
    """Turns one of the date page's switches on or off.

    ``kind`` is ``"automatic"``, ``"automatic_timezone"`` or ``"military_time"``.
    """

    kind: str
    enable: bool

    def __post_init__(self) -> None:
        if self.kind not in _DATE_SETTINGS:
            raise ValueError(f"unknown date setting: {self.kind!r}")


@dataclass
class DatePage(Page):
    """Date, time zone and time format."""

    auto: bool = False
    auto_timezone: bool = False
    military_time: bool = False

    def content(self, sections) -> Content:
        return [
            sections.insert(_date_section()),
            sections.insert(_timezone_section()),
            sections.insert(_format_section()),
        ]

    def info(self) -> Info:
        return Info(
            "time-date",
            "preferences-system-time-symbolic",
            title=_fl("time-date"),
            description=_fl("time-date", "desc"),
        )

    def update(self, message: DateMessage) -> None:
        """Apply a switch change."""
        setattr(self, _DATE_SETTINGS[message.kind], message.enable)


def _date_section() -> Section:
    def view(binder: Binder, page: DatePage, section: Section) -> dict[str, Any]:
        desc = section.descriptions
        return _view_section(
            section.title,
            [
                _item(desc[0], _toggler(page.auto, lambda on: DateMessage("automatic", on))),
                _item(desc[1], _space()),
            ],
        )

    return Section(
        title=_fl("time-date"),
        descriptions=[_fl("time-date", "auto"), _fl("time-date")],
    ).view(DatePage, view)


def _format_section() -> Section:
    def view(binder: Binder, page: DatePage, section: Section) -> dict[str, Any]:
        desc = section.descriptions
        return _view_section(
            section.title,
            [
                _item(
                    desc[0],
                    _toggler(page.military_time, lambda on: DateMessage("military_time", on)),
                ),
                _item(desc[1], _space()),
            ],
        )

    return Section(
        title=_fl("time-format"),
        descriptions=[_fl("time-format", "twenty-four"), _fl("time-format", "first")],
    ).view(DatePage, view)


def _timezone_section() -> Section:
    def view(binder: Binder, page: DatePage, section: Section) -> dict[str, Any]:
        desc = section.descriptions
        return _view_section(
            section.title,
            [
                _item(
                    desc[0],
                    _toggler(
                        page.auto_timezone,
                        lambda on: DateMessage("automatic_timezone", on),
                    ),
                    description=desc[1],
                ),
                _item(desc[2], _space()),
            ],
        )

    return Section(
        title=_fl("time-zone"),
        descriptions=[
            _fl("time-zone", "auto"),
            _fl("time-zone", "auto-info"),
            _fl("time-zone"),
        ],
    ).view(DatePage, view)


class RegionPage(Page):
    """Region and language formats."""

    def content(self, sections) -> Content:
        return [sections.insert(Section())]

    def info(self) -> Info:
        return Info(
            "time-region",
            "preferences-desktop-locale-symbolic",
            title=_fl("time-region"),
            description=_fl("time-region", "desc"),
        )


# --- Networking --------------------------------------------------------------


def accounts_info() -> Info:
    """Information about the online accounts page."""
    return Info(
        "online-accounts",
        "goa-panel-symbolic",
        title=_fl("online-accounts"),
        description=_fl("online-accounts", "desc"),
    )


def wired_info() -> Info:
    """Information about the wired network page."""
    return Info(
        "wired",
        "network-workgroup-symbolic",
        title=_fl("wired"),
        description=_fl("wired", "desc"),
    )