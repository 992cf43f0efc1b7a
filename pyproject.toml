[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aprskit"
version = "0.1.2"
description = "APRS information-field parsing and encoding: positions, timestamps, weather, telemetry and more"
requires-python = ">=3.10"
dependencies = []
keywords = ["aprs", "amateur-radio", "packet", "ham-radio", "telemetry", "weather"]
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
    "Topic :: Communications :: Ham Radio",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["aprskit"]

[tool.pytest.ini_options]
addopts = "-ra"
