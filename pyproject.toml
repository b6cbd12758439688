[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "didregistry"
version = "0.1.0"
description = "A decentralized identifier (DID) document registry with a compact binary wire format and an instruction processor"
requires-python = ">=3.10"
dependencies = []
keywords = ["did", "decentralized-identity", "identity", "registry", "serialization"]
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
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["didregistry"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
