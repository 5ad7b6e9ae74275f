"""Keyboard settings: input sources, special character keys and shortcuts."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from settings_pages.page import Binder, Content, Entity, Info, Insert, Page
from settings_pages.section import Section

ADD_INPUT_SOURCE_DIALOGUE_ID = 2000
SPECIAL_CHARACTER_DIALOGUE_ID = 2001

COMPOSE_OPTIONS: tuple[tuple[str, str], ...] = (
    ("Right Alt", "compose:ralt"),
    ("Left Super", "compose:lwin"),
    ("Right Super", "compose:rwin"),
    ("Menu key", "compose:menu"),
    ("Right Ctrl", "compose:rctrl"),
    ("Caps Lock", "compose:caps"),
    ("Scroll Lock", "compose:sclk"),
    ("Print Screen", "compose:prsc"),
)

ALTERNATE_CHARACTER_OPTIONS: tuple[tuple[str, str], ...] = (
    ("Left Alt", "lv3:lalt_switch"),
    ("Right Alt", "lv3:alt_switch"),
    ("Left Super", "lv3:lwin_switch"),
    ("Right Super", "lv3:win_switch"),
    ("Menu key", "lv3:menu_switch"),
    ("Caps Lock", "lv3:caps_switch"),
)


class SpecialKey(enum.Enum):
    """A key that can be assigned a special character role."""

    ALTERNATE_CHARACTERS = enum.auto()
    COMPOSE = enum.auto()

    def title(self) -> str:
        """Human readable name of the role."""
        if self is SpecialKey.COMPOSE:
            return "Compose"
        return "Alternate Characters"

    def prefix(self) -> str:
        """Prefix of the xkb options that configure this role."""
        if self is SpecialKey.COMPOSE:
            return "compose:"
        return "lv3:"


@dataclass(frozen=True)
class InputSource:
    """A keyboard layout the user can type with."""

    id: str
    label: str


def default_input_sources() -> list[InputSource]:
    """Input sources shown when nothing else is configured."""
    return [InputSource(id="us", label="English (US)")]


def special_key_options(special_key: SpecialKey) -> tuple[tuple[str, str], ...]:
    """The (description, xkb option) choices for a special key."""
    if special_key is SpecialKey.COMPOSE:
        return COMPOSE_OPTIONS
    return ALTERNATE_CHARACTER_OPTIONS


def current_special_option(special_key: SpecialKey, xkb_options: Optional[str]) -> Optional[str]:
    """The xkb option currently assigned to the special key, if any."""
    if xkb_options is None:
        return None
    prefix = special_key.prefix()
    return next((opt for opt in xkb_options.split(",") if opt.startswith(prefix)), None)


def replace_special_option(
    xkb_options: Optional[str], special_key: SpecialKey, option: Optional[str]
) -> Optional[str]:
    """The xkb options with the special key's option replaced; None if nothing remains."""
    prefix = special_key.prefix()
    kept = [opt for opt in (xkb_options or "").split(",") if not opt.startswith(prefix)]
    if option is not None:
        kept.append(option)
    joined = ",".join(kept)
    return joined or None


def _fl(message: str, attribute: Optional[str] = None) -> str:
    return message if attribute is None else f"{message}.{attribute}"


def _view_section(title: str, items: list[Any]) -> dict[str, Any]:
    return {"kind": "section", "title": title, "items": items}


def _text(text: str) -> dict[str, Any]:
    return {"kind": "text", "text": text}


def _input_page(binder: Binder) -> Any:
    """The input page that holds the keyboard state."""
    for id, info in binder.info.items():
        if info.id == "input":
            page = binder.model(id)
            if page is not None:
                return page
    raise LookupError("input page not found")


def _popover_menu_row(label: str) -> dict[str, Any]:
    return {"kind": "button", "style": "transparent", "content": _text(label)}


def _popover_menu() -> dict[str, Any]:
    return {
        "kind": "column",
        "children": [
            _popover_menu_row(_fl("keyboard-sources", "move-up")),
            _popover_menu_row(_fl("keyboard-sources", "move-down")),
            {"kind": "divider"},
            _popover_menu_row(_fl("keyboard-sources", "settings")),
            _popover_menu_row(_fl("keyboard-sources", "view-layout")),
            _popover_menu_row(_fl("keyboard-sources", "remove")),
        ],
    }


def _popover_button(source: InputSource, expanded: bool) -> dict[str, Any]:
    button = {
        "kind": "button",
        "icon": "open-menu-symbolic",
        "size": 20,
        "style": "symbolic_active" if expanded else "symbolic",
        "on_press": ("expand_input_source_popover", None if expanded else source.id),
    }
    if expanded:
        return {"kind": "popover", "content": button, "popup": _popover_menu()}
    return button


def _input_source_item(source: InputSource, expanded_source: Optional[str]) -> dict[str, Any]:
    expanded = expanded_source == source.id
    return {
        "kind": "item",
        "title": source.label,
        "description": None,
        "control": _popover_button(source, expanded),
    }


def _go_next_item(description: str, message: Any) -> dict[str, Any]:
    return {
        "kind": "button",
        "style": "transparent",
        "on_press": message,
        "content": {
            "kind": "item",
            "title": description,
            "description": None,
            "control": {"kind": "icon", "name": "go-next-symbolic", "size": 20},
        },
    }


def _input_sources() -> Section:
    def view(binder: Binder, page: KeyboardPage, section: Section) -> dict[str, Any]:
        input_page = _input_page(binder)
        expanded = input_page.expanded_source_popover
        items = [_input_source_item(source, expanded) for source in input_page.sources]
        return _view_section(section.title, items)

    return Section(title=_fl("keyboard-sources")).view(KeyboardPage, view)


def _special_character_entry() -> Section:
    def view(binder: Binder, page: KeyboardPage, section: Section) -> dict[str, Any]:
        desc = section.descriptions
        return _view_section(
            section.title,
            [
                _go_next_item(
                    desc[0],
                    ("open_special_character_dialog", SpecialKey.ALTERNATE_CHARACTERS),
                ),
                _go_next_item(desc[1], ("open_special_character_dialog", SpecialKey.COMPOSE)),
            ],
        )

    return Section(
        title=_fl("keyboard-special-char"),
        descriptions=[
            _fl("keyboard-special-char", "alternate"),
            _fl("keyboard-special-char", "compose"),
        ],
    ).view(KeyboardPage, view)


def _keyboard_shortcuts() -> Section:
    def view(binder: Binder, page: KeyboardPage, section: Section) -> dict[str, Any]:
        items = []
        shortcuts = next(
            (id for id, info in binder.info.items() if info.id == "keyboard-shortcuts"), None
        )
        if shortcuts is not None:
            items.append(_go_next_item(section.descriptions[0], ("page", shortcuts)))
        return _view_section(section.title, items)

    return Section(
        title=_fl("keyboard-shortcuts"),
        descriptions=[_fl("keyboard-shortcuts", "desc")],
    ).view(KeyboardPage, view)


class KeyboardPage(Page):
    """Input sources, special character keys and a link to the shortcuts."""

    def content(self, sections) -> Content:
        return [
            sections.insert(_input_sources()),
            sections.insert(_special_character_entry()),
            sections.insert(_keyboard_shortcuts()),
        ]

    def info(self) -> Info:
        return Info(
            "keyboard",
            "input-keyboard-symbolic",
            title=_fl("keyboard"),
            description=_fl("keyboard", "desc"),
        )

    @classmethod
    def sub_pages(cls, insert: Insert) -> Insert:
        return insert.sub_page(ShortcutsPage)


def _shortcuts() -> Section:
    def view(binder: Binder, page: ShortcutsPage, section: Section) -> dict[str, Any]:
        _input_page(binder)
        return {"kind": "column", "children": [_view_section(section.title, [])]}

    return Section(descriptions=[]).view(ShortcutsPage, view)


class ShortcutsPage(Page):
    """Keyboard shortcuts."""

    def content(self, sections) -> Content:
        return [sections.insert(_shortcuts())]

    def info(self) -> Info:
        return Info(
            "keyboard-shortcuts",
            "input-keyboard-symbolic",
            title=_fl("keyboard-shortcuts"),
            description=_fl("keyboard-shortcuts", "desc"),
        )


__all__ = [
    "ADD_INPUT_SOURCE_DIALOGUE_ID",
    "ALTERNATE_CHARACTER_OPTIONS",
    "COMPOSE_OPTIONS",
    "SPECIAL_CHARACTER_DIALOGUE_ID",
    "Entity",
    "InputSource",
    "KeyboardPage",
    "ShortcutsPage",
    "SpecialKey",
    "current_special_option",
    "default_input_sources",
    "replace_special_option",
    "special_key_options",
]