import asyncio

import pytest

from settings_pages.page import Binder, Entity, Info, Insert, Page
from settings_pages.section import Section


class Child(Page):
    def info(self):
        return Info("child", "child-icon", title="Child", description="A child")

    def content(self, sections):
        return [sections.insert(Section(title="Volume", descriptions=["Balance"]))]


class Other(Page):
    def info(self):
        return Info("other", "other-icon", title="Other")

    def content(self, sections):
        return [
            sections.insert(Section(title="Mouse")),
            sections.insert(Section(title="Hidden Volume", search_ignore=True)),
        ]


class Parent(Page):
    def info(self):
        return Info("parent", "parent-icon", title="Parent")

    @classmethod
    def sub_pages(cls, insert):
        return insert.sub_page(Child).sub_page(Other)


class Loading(Page):
    def info(self):
        return Info("loading", "icon")

    def load(self, page):
        async def task():
            return ("loaded", page)

        return task()


class Counter:
    def __init__(self):
        self.count = 0


def test_register_sets_parent_and_sub_pages():
    binder = Binder()
    parent_id = binder.register(Parent).id
    child_id = binder.page_id(Child)
    other_id = binder.page_id(Other)
    assert binder.info[child_id].parent == parent_id
    assert binder.info[other_id].parent == parent_id
    assert binder.sub_pages(parent_id) == [child_id, other_id]
    assert binder.info[parent_id].parent is None


def test_page_lookup_by_type():
    binder = Binder()
    binder.register(Parent)
    assert isinstance(binder.page(Child), Child)
    assert binder.model(binder.page_id(Child)) is binder.page(Child)
    assert binder.page(Loading) is None
    assert binder.page_id(Loading) is None


def test_content_and_no_content():
    binder = Binder()
    parent_id = binder.register(Parent).id
    assert binder.content(parent_id) is None
    assert len(binder.content(binder.page_id(Other))) == 2


def test_search_yields_matching_sections():
    binder = Binder()
    binder.register(Parent)
    results = list(binder.search("Volume"))
    child_id = binder.page_id(Child)
    assert results == [(child_id, binder.content(child_id)[0])]


def test_search_by_description():
    binder = Binder()
    binder.register(Parent)
    pages = [page for page, _ in binder.search("Bal")]
    assert pages == [binder.page_id(Child)]


def test_insert_content_overrides():
    binder = Binder()
    insert = binder.register(Child)
    section_id = binder.sections.insert(Section(title="Extra"))
    result = insert.content([section_id])
    assert isinstance(result, Insert)
    assert binder.content(insert.id) == [section_id]


def test_sub_page_missing_parent():
    binder = Binder()
    insert = Insert(binder, Entity("page", 42))
    with pytest.raises(KeyError):
        insert.sub_page(Child)


def test_data_set_get_remove():
    binder = Binder()
    id = binder.register(Child).id
    binder.data_set(id, Counter())
    binder.data(Counter, id).count += 3
    assert binder.data(Counter, id).count == 3
    binder.data_remove(Counter, id)
    assert binder.data(Counter, id) is None


def test_data_set_ignored_for_unknown_page():
    binder = Binder()
    missing = Entity("page", 7)
    binder.data_set(missing, Counter())
    assert binder.contains_item(missing) is False
    assert binder.data(Counter, missing) is None


def test_resource_register_keeps_existing():
    binder = Binder()
    assert binder.resource(Counter) is None
    binder.resource_register(Counter)
    binder.resource(Counter).count = 5
    binder.resource_register(Counter)
    assert binder.resource(Counter).count == 5


def test_page_reload_without_task():
    binder = Binder()
    id = binder.register(Child).id
    assert binder.page_reload(id) is None
    assert binder.page_reload(Entity("page", 99)) is None


@pytest.mark.asyncio
async def test_page_reload_runs_task():
    binder = Binder()
    id = binder.register(Loading).id
    task = binder.page_reload(id)
    assert await asyncio.wait_for(task, 1) == ("loaded", id)


def test_entities_are_distinct():
    binder = Binder()
    a = binder.register(Child).id
    b = binder.register(Other).id
    assert a != b
    assert binder.contains_item(a) and binder.contains_item(b)