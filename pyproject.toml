[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "inetbox"
version = "0.1.0"
description = "Status frames, value conversions and entity logic for Truma/Alde heaters and air conditioners on a LIN bus, plus UART helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["truma", "alde", "inetbox", "lin", "uart", "heater", "aircon", "caravan", "rv"]
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
    "Topic :: Home Automation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["inetbox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
