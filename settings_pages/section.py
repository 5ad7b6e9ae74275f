"""Searchable sections that settings pages are composed of."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Union

if TYPE_CHECKING:
    from settings_pages.page import Binder, Page

ViewFn = Callable[["Binder", "Page", "Section"], Any]
Rule = Union[str, "re.Pattern[str]"]


def _view_section(title: str, items: Iterable[Any] = ()) -> dict[str, Any]:
    """Describe a titled settings section holding the given items."""
    return {"kind": "section", "title": title, "items": list(items)}


def _view_column(children: Iterable[Any]) -> dict[str, Any]:
    """Describe a vertical column of child elements."""
    return {"kind": "column", "children": list(children)}


def unimplemented(binder: Binder, page: Page, section: Section) -> dict[str, Any]:
    """Default view of a section: a column holding one empty, untitled section."""
    return _view_column([_view_section("")])


def _compile(rule: Rule) -> re.Pattern[str]:
    return re.compile(rule) if isinstance(rule, str) else rule


@dataclass
class Section:
    """A searchable sub-component of a page.

    Searches can group multiple sections together.
    """

    title: str = ""
    descriptions: list[str] = field(default_factory=list)
    view_fn: ViewFn = field(default=unimplemented, repr=False)
    search_ignore: bool = False

    def search_matches(self, rule: Rule) -> bool:
        """Whether the title or any description matches the rule."""
        if self.search_ignore:
            return False
        pattern = _compile(rule)
        return any(pattern.search(text) for text in (self.title, *self.descriptions))

    def view(self, model_type: type, func: Callable[[Binder, Any, Section], Any]) -> Section:
        """Set the view function; the page it is given must be a ``model_type``."""

        def view_fn(binder: Binder, model: Page, section: Section) -> Any:
            if not isinstance(model, model_type):
                raise TypeError(
                    f"page model type mismatch: expected {model_type.__qualname__}"
                )
            return func(binder, model, section)

        self.view_fn = view_fn
        return self

    def render(self, binder: Binder, page: Page) -> Any:
        """Produce the view of this section for the given page."""
        return self.view_fn(binder, page, self)