[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yunying"
version = "0.1.0"
description = "Railway ticket client logic: seat types, train and seat choice rules, order strings, station completion, CDN rotation and login checks"
requires-python = ">=3.10"
dependencies = []
keywords = ["railway", "tickets", "train", "seat", "booking", "completion"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["yunying"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
