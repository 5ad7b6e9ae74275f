"""Pages of the settings panel and the binder that registers them."""

from __future__ import annotations

import itertools
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Generic, Iterator, Optional, TypeVar, Union

from settings_pages.section import Section

T = TypeVar("T")
Content = list["Entity"]


@dataclass(frozen=True, order=True)
class Entity:
    """Unique identifier of a page or of a section."""

    namespace: str
    index: int


class _Store(Generic[T]):
    """Insertion-ordered map that hands out a fresh key for every value."""

    def __init__(self, namespace: str) -> None:
        self._namespace = namespace
        self._items: dict[Entity, T] = {}
        self._counter = itertools.count()

    def insert(self, value: T) -> Entity:
        key = Entity(self._namespace, next(self._counter))
        self._items[key] = value
        return key

    def get(self, key: Entity, default: Optional[T] = None) -> Optional[T]:
        return self._items.get(key, default)

    def items(self):
        return self._items.items()

    def values(self):
        return self._items.values()

    def __getitem__(self, key: Entity) -> T:
        return self._items[key]

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


@dataclass
class Info:
    """Information about a page: its title, icon and description."""

    id: str
    icon_name: str
    title: str = ""
    description: str = ""
    parent: Optional[Entity] = None


class Page(ABC):
    """A settings page."""

    @abstractmethod
    def info(self) -> Info:
        """Information about the page."""

    def content(self, sections: _Store[Section]) -> Optional[Content]:
        """Sections the page is made of, inserted into ``sections``."""
        return None

    def load(self, page: Entity) -> Optional[Awaitable[Any]]:
        """A background task that refreshes the page's data, if any."""
        return None

    @classmethod
    def sub_pages(cls, insert: Insert) -> Insert:
        """Attach sub-pages to the page."""
        return insert


@dataclass
class Insert:
    """An inserted page which may have additional properties assigned to it."""

    model: Binder
    id: Entity

    def content(self, content: Content) -> Insert:
        self.model.content[self.id] = list(content)
        return self

    def sub_page(self, page_type: type[Page]) -> Insert:
        """Register a page and associate it with this one as its parent."""
        if self.id not in self.model.info:
            raise KeyError("parent page missing")
        sub_page = self.model.register(page_type).id
        self.model.info[sub_page].parent = self.id
        self.model.sub_pages_map.setdefault(self.id, []).append(sub_page)
        return self


@dataclass
class Binder:
    """Registers and manages all settings pages."""

    info: _Store[Info] = field(default_factory=lambda: _Store("page"))
    pages: dict[Entity, Page] = field(default_factory=dict)
    typed_page_ids: dict[type, Entity] = field(default_factory=dict)
    resources: dict[type, Any] = field(default_factory=dict)
    storage: dict[type, dict[Entity, Any]] = field(default_factory=dict)
    sub_pages_map: dict[Entity, list[Entity]] = field(default_factory=dict)
    sections: _Store[Section] = field(default_factory=lambda: _Store("section"))
    content_map: dict[Entity, Content] = field(default_factory=dict)

    @property
    def content_(self) -> dict[Entity, Content]:
        return self.content_map

    def contains_item(self, id: Entity) -> bool:
        return id in self.info

    def content(self, page: Entity) -> Optional[Content]:
        """The sections of a page, if it has any."""
        return self.content_map.get(page)

    def data(self, data_type: type[T], id: Entity) -> Optional[T]:
        value = self.storage.get(data_type, {}).get(id)
        return value if isinstance(value, data_type) else None

    def data_set(self, id: Entity, data: Any) -> None:
        """Associate data with a page; ignored for unknown pages."""
        if self.contains_item(id):
            self.storage.setdefault(type(data), {})[id] = data

    def data_remove(self, data_type: type, id: Entity) -> None:
        self.storage.get(data_type, {}).pop(id, None)

    def register(self, page_type: type[Page]) -> Insert:
        """Create a page of the given type, register it and its sub-pages."""
        id = self.register_page(page_type())
        self.typed_page_ids[page_type] = id
        return page_type.sub_pages(Insert(self, id))

    def register_page(self, page: Page) -> Entity:
        id = self.info.insert(page.info())
        content = page.content(self.sections)
        if content is not None:
            self.content_map[id] = list(content)
        self.pages[id] = page
        return id

    def model(self, id: Entity) -> Optional[Page]:
        return self.pages.get(id)

    def page_id(self, page_type: type[Page]) -> Optional[Entity]:
        return self.typed_page_ids.get(page_type)

    def page(self, page_type: type[T]) -> Optional[T]:
        id = self.page_id(page_type)
        if id is None:
            return None
        page = self.pages.get(id)
        return page if isinstance(page, page_type) else None

    def page_reload(self, id: Entity) -> Optional[Awaitable[Any]]:
        """The page's load task, if the page exists and has one."""
        page = self.pages.get(id)
        return None if page is None else page.load(id)

    def resource(self, resource_type: type[T]) -> Optional[T]:
        value = self.resources.get(resource_type)
        return value if isinstance(value, resource_type) else None

    def resource_register(self, resource_type: type) -> None:
        if resource_type not in self.resources:
            self.resources[resource_type] = resource_type()

    def search(self, rule: Union[str, "re.Pattern[str]"]) -> Iterator[tuple[Entity, Entity]]:
        """Yield (page, section) pairs whose section matches the rule."""
        pattern = re.compile(rule) if isinstance(rule, str) else rule
        for page, sections in self.content_map.items():
            for id in sections:
                if self.sections[id].search_matches(pattern):
                    yield page, id

    def sub_pages(self, page: Entity) -> Optional[list[Entity]]:
        return self.sub_pages_map.get(page)