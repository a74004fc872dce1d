[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dsbus"
version = "0.1.0"
description = "Memory-bus peripherals of a dual-screen handheld emulator: backup memory, DMA, CP15, firmware, touchscreen and hardware arithmetic"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "nds", "dma", "eeprom", "flash", "firmware", "cp15", "touchscreen"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dsbus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
