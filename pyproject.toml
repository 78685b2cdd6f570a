[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tankbattle"
version = "0.1.0"
description = "A turn-based tank battle simulator on a wrapping grid, with pluggable tank algorithms"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "tanks", "simulation", "grid", "turn-based"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Turn Based Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tankbattle = "tankbattle.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tankbattle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
