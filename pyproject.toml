[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fennelchain"
version = "0.1.0"
description = "In-memory model of a small blockchain runtime with signal, web-of-trust and validator-management modules."
requires-python = ">=3.10"
dependencies = []
keywords = ["blockchain", "runtime", "web-of-trust", "validators", "signals", "simulation"]
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
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fennelchain"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
