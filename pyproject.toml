[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ahoydtu"
version = "0.1.0"
description = "Payload tables, alarm decoding and radio framing for HM and MI series micro-inverters"
requires-python = ">=3.10"
keywords = ["hoymiles", "inverter", "dtu", "solar", "nrf24", "protocol"]
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
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ahoydtu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
