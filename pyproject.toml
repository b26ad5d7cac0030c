[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "droneplan"
version = "0.1.0"
description = "HTTP service that stores plantation estates and trees and plans a monitoring drone's flight over them"
requires-python = ">=3.10"
dependencies = [
    "flask",
]
keywords = ["drone", "estate", "flight-plan", "plantation", "flask", "http-api", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["droneplan"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
