[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "structquery"
version = "0.1.0"
description = "Filter collections of objects, dataclasses and mappings with a small SQL-like query language."
requires-python = ">=3.10"
dependencies = []
keywords = ["query", "filter", "sql", "dataclass", "search", "humanize"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Typing :: Typed",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["structquery"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
