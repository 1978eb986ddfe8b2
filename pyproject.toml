[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "e2eframework"
version = "0.1.0"
description = "Building blocks for end-to-end test suites: command-line filter flags, environment configuration and feature definitions."
requires-python = ">=3.10"
dependencies = []
keywords = ["testing", "e2e", "end-to-end", "features", "assessments"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Testing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["e2eframework"]

[tool.pytest.ini_options]
addopts = "-ra"
