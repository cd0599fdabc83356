[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "envman"
version = "0.1.0"
description = "Portable SDK environment manager driven by YAML toolchain definitions"
requires-python = ">=3.10"
keywords = ["sdk", "environment", "toolchain", "activation", "portable"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
envman = "envman.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["envman"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
