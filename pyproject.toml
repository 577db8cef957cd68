[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hdcli"
version = "0.1.0"
description = "Configuration, argument grammar, request building and terminal rendering for HeadsDown availability tooling"
requires-python = ">=3.11"
dependencies = [
    "tomli-w",
]
keywords = ["cli", "availability", "developer-tools", "focus", "scheduling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hdcli"]

[tool.pytest.ini_options]
addopts = "-ra"
