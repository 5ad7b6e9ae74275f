"""Settings pages, their searchable sections and the data models behind them."""

__version__ = "0.1.0"

__all__ = [
    "about",
    "input",
    "keyboard",
    "page",
    "pages",
    "section",
    "timeinfo",
    "wallpaper",
]