[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tracesim"
version = "5.0.0"
description = "Building blocks for trace-driven garbage-collection simulation: trace parsing, object graphs, root and remembered sets, write barriers and simulator options"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "garbage collection",
    "memory management",
    "simulation",
    "trace",
    "write barrier",
    "reference counting",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tracesim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
