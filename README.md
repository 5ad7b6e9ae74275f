# settings-pages

A library for the model behind a desktop settings panel: a registry of
pages, their searchable sections, and the data and state of the system,
time, wallpaper, keyboard and input pages.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Pages and the binder

Every settings page derives from `settings_pages.page.Page` and returns an
`Info` (`id`, `icon_name`, `title`, `description`, `parent`) from its
`info()` method. A page may also return its sections from `content()`,
a background task from `load()`, and attach sub-pages in the class method
`sub_pages()`.

Pages are registered with a `Binder`. It gives each page an `Entity` id,
keeps its sections and sub-pages, stores per-page data (`data_set`, `data`,
`data_remove`) and shared resources (`resource_register`, `resource`), and
can search across every section:

```python
import re

from settings_pages.page import Binder
from settings_pages.pages import SystemPage

binder = Binder()
system_id = binder.register(SystemPage).id

for page_id in binder.sub_pages(system_id):
    print(binder.info[page_id].title)

for page_id, section_id in binder.search(re.compile("memory", re.IGNORECASE)):
    print(binder.info[page_id].id, binder.sections[section_id].title)
```

`binder.page(PageType)` returns the registered instance of a page class and
`binder.page_reload(id)` returns the page's load task, if it has one.

A `Section` (`settings_pages.section`) holds a title and descriptions that
`search_matches()` tests against a regular expression (a string or a
compiled pattern). Sections created with `search_ignore=True` never match.
`Section.view(PageType, func)` sets the function that describes the
section's view; `render(binder, page)` calls it and raises `TypeError` when
the page is not of the expected type.

## Modules

- `settings_pages.section` – `Section` and the default `unimplemented` view.
- `settings_pages.page` – `Entity`, `Info`, `Page`, `Insert` and `Binder`.
- `settings_pages.about` – `SystemInfo.load()` gathers the hardware model,
  operating system, architecture, processor, memory, disk capacity, host
  name, session type, desktop session and graphics adapters (the latter by
  running `lspci`). The readers `architecture()`, `hardware_model()`,
  `operating_system()` and `processor_name()` take the path to read from, so
  they can be pointed at other files. `format_size(1536)` gives
  `"1.50 KiB"`; sizes under 1024 are given in `B`.
- `settings_pages.timeinfo` – `await TimeInfo.load(proxy)` asks a proxy with
  async `can_ntp()` and `timezone()` methods for NTP support and the time
  zone, and adds the current time as a naive datetime counted from the Unix
  epoch. Only fixed offsets (`Z`, `+hh`, `+hhmm`, `+hh:mm`) are understood;
  for any other time zone it returns `None`.
- `settings_pages.wallpaper` – `DEFAULT_COLORS`, and
  `load_each_from_path(path, cache=None)`, a generator that walks a
  directory tree and yields `(path, display_thumbnail, selection_thumbnail)`
  for every image it can decode. Display thumbnails fit within 300×169 and
  are cached as PNG files (by default under
  `$XDG_CACHE_HOME/settings_pages/wallpapers`); selection thumbnails are
  158×105 with corners rounded by `round_corners()`.
- `settings_pages.pages` – sound, system, about, firmware, users, time,
  date and region pages, `DateMessage` for the date page's switches, and
  `accounts_info()` and `wired_info()`.
- `settings_pages.keyboard` – `SpecialKey`, `InputSource`, the compose and
  alternate character options, and the keyboard and shortcuts pages.
  `replace_special_option()` swaps the option a special key uses in an xkb
  option string:

  ```python
  from settings_pages.keyboard import SpecialKey, replace_special_option

  replace_special_option("grp:alt_shift_toggle,compose:ralt", SpecialKey.COMPOSE, "compose:caps")
  # 'grp:alt_shift_toggle,compose:caps'
  ```

- `settings_pages.input` – `InputConfig`, `XkbConfig`, the `InputPage`
  whose `update(InputMessage(...))` applies mouse, touchpad and special-key
  changes and returns a `WindowRequest` when a dialog is to be opened or
  closed, the mouse and touchpad pages, and the slider conversions. Settings
  are kept by a `ConfigStore` as one JSON file per key under
  `$XDG_CONFIG_HOME/settings_pages/<name>/v<version>/`.

## What it does not do

The package draws nothing: section views are plain dictionaries that
describe widgets, for a user interface to render. Titles and descriptions
are message identifiers such as `"sound.desc"`, not translated text. The
sound, firmware, users and region pages hold no live state. The package
does not read or write the desktop's wallpaper configuration, does not list
connected displays, and does not change the system clock or time zone.