[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stkit"
version = "0.8.4"
description = "Terminal emulator building blocks: sixel decoding, box-drawing geometry, key tables, X resources and helper actions"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "sixel", "box-drawing", "xresources", "keyboard", "urls"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
