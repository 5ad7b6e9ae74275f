[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "settings-pages"
version = "0.1.0"
description = "Searchable settings page registry with system information, wallpaper thumbnails and input configuration models"
requires-python = ">=3.10"
keywords = ["settings", "desktop", "pages", "wallpaper", "thumbnails", "input", "keyboard", "xkb"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
]
dependencies = [
    "pillow",
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["settings_pages"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
