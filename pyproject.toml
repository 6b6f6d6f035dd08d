[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vtemu"
version = "0.1.0"
description = "A VT100/xterm-style terminal screen model: framebuffer, draw state and control-function dispatch"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "emulator", "vt100", "xterm", "ansi", "escape-sequences", "framebuffer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["vtemu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
