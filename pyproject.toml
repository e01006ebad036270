[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dailies"
version = "0.1.0"
description = "Daily journaling in plain markdown"
requires-python = ">=3.11"
keywords = ["dailies", "journal", "note-taking", "markdown"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: News/Diary",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dailies = "dailies.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dailies"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
