[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "midgarts"
version = "0.1.0"
description = "Readers for Ragnarok Online client data files (GRF, ACT, SPR, GAT, GND) and character sprite animation logic"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["ragnarok", "grf", "sprite", "act", "spr", "gat", "gnd", "game"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
    "Topic :: File Formats",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["midgarts"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
