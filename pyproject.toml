[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "v2gapphand"
version = "0.9.4"
description = "EXI encoder and decoder for the V2G supportedAppProtocol handshake messages"
requires-python = ">=3.10"
keywords = ["exi", "v2g", "iso15118", "din70121", "ev-charging", "handshake"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["v2gapphand"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
