import pytest

from settings_pages.about import SystemInfo
from settings_pages.page import Binder
from settings_pages.pages import (
    AboutPage,
    DateMessage,
    DatePage,
    FirmwarePage,
    RegionPage,
    SoundPage,
    SystemPage,
    TimePage,
    UsersPage,
    accounts_info,
    wired_info,
)


def _sections_of(binder, page_type):
    page_id = binder.page_id(page_type)
    return [binder.sections[s] for s in binder.content(page_id)]


def test_sound_page_sections_in_order():
    binder = Binder()
    binder.register(SoundPage)
    titles = [s.title for s in _sections_of(binder, SoundPage)]
    assert titles == ["sound-output", "sound-input", "sound-alerts", "sound-applications"]


def test_sound_output_view_shows_four_of_five_descriptions():
    binder = Binder()
    binder.register(SoundPage)
    output = _sections_of(binder, SoundPage)[0]
    assert len(output.descriptions) == 5
    view = output.render(binder, binder.page(SoundPage))
    assert [item["title"] for item in view["items"]] == output.descriptions[:4]


def test_search_finds_sound_section():
    binder = Binder()
    page_id = binder.register(SoundPage).id
    output_id = binder.content(page_id)[0]
    assert list(binder.search("sound-output")) == [(page_id, output_id)]


def test_render_with_wrong_page_type_raises():
    binder = Binder()
    binder.register(SoundPage)
    section = _sections_of(binder, SoundPage)[0]
    with pytest.raises(TypeError):
        section.render(binder, DatePage())


def test_system_page_registers_sub_pages_with_parent():
    binder = Binder()
    system_id = binder.register(SystemPage).id
    children = binder.sub_pages(system_id)
    assert [binder.info[c].id for c in children] == ["users", "about", "firmware"]
    assert all(binder.info[c].parent == system_id for c in children)
    assert binder.content(system_id) is None


def test_time_page_registers_date_and_region():
    binder = Binder()
    time_id = binder.register(TimePage).id
    children = binder.sub_pages(time_id)
    assert children == [binder.page_id(DatePage), binder.page_id(RegionPage)]


@pytest.mark.parametrize("page_type", [FirmwarePage, UsersPage, RegionPage])
def test_placeholder_pages_have_one_empty_section(page_type):
    binder = Binder()
    binder.register(page_type)
    sections = _sections_of(binder, page_type)
    assert len(sections) == 1
    assert sections[0].title == ""


def test_date_page_update():
    page = DatePage()
    page.update(DateMessage("automatic", True))
    page.update(DateMessage("military_time", True))
    assert (page.auto, page.auto_timezone, page.military_time) == (True, False, True)
    page.update(DateMessage("automatic", False))
    assert page.auto is False


def test_date_message_rejects_unknown_kind():
    with pytest.raises(ValueError):
        DateMessage("daylight", True)


def test_date_toggler_round_trip():
    binder = Binder()
    binder.register(DatePage)
    page = binder.page(DatePage)
    timezone_section = _sections_of(binder, DatePage)[1]
    toggler = timezone_section.render(binder, page)["items"][0]["control"]
    assert toggler["value"] is False
    page.update(toggler["on_toggle"](True))
    assert page.auto_timezone is True
    again = timezone_section.render(binder, page)["items"][0]["control"]
    assert again["value"] is True


def test_about_hardware_lists_each_graphics_card():
    binder = Binder()
    binder.register(AboutPage)
    page = binder.page(AboutPage)
    page.update(SystemInfo(graphics=["card one", "card two"], memory="8 GiB"))
    hardware = _sections_of(binder, AboutPage)[2]
    items = hardware.render(binder, page)["items"]
    texts = [item["control"]["text"] for item in items]
    assert texts[3:5] == ["card one", "card two"]
    assert texts[1] == "8 GiB"
    assert len(items) == 6


def test_about_logo_is_not_searchable():
    binder = Binder()
    page_id = binder.register(AboutPage).id
    logo_id = binder.content(page_id)[0]
    found = [section for _, section in binder.search("")]
    assert logo_id not in found
    assert len(found) == len(binder.content(page_id)) - 1


@pytest.mark.asyncio
async def test_about_load_feeds_update():
    binder = Binder()
    page_id = binder.register(AboutPage).id
    task = binder.page_reload(page_id)
    info = await task
    page = binder.page(AboutPage)
    page.update(info)
    assert page.system is info


def test_networking_infos():
    accounts = accounts_info()
    wired = wired_info()
    assert (accounts.id, accounts.icon_name) == ("online-accounts", "goa-panel-symbolic")
    assert (wired.id, wired.icon_name) == ("wired", "network-workgroup-symbolic")
    assert wired.parent is None and accounts.parent is None