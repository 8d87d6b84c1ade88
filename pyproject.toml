[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slogpp"
version = "0.1.0"
description = "Structured logging with typed attributes, JSON, plain-text and tree-style ANSI output"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "structured-logging", "json", "attributes", "sink"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
slogpp-benchmarks = "slogpp.benchmarks.run:main"

[tool.hatch.build.targets.wheel]
packages = ["slogpp"]

[tool.hatch.build.targets.sdist]
include = ["slogpp", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
