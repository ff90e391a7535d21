[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ringchord"
version = "0.1.0"
description = "Chord ring primitives: 160-bit identifiers, finger tables, successor sequences and message chunking"
requires-python = ">=3.10"
dependencies = []
keywords = ["chord", "dht", "p2p", "distributed-hash-table", "chunking"]
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
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ringchord"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
