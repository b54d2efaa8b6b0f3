[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pokerclub"
version = "0.1.0"
description = "Membership, budget, event and ranking bookkeeping for a poker club, stored in SQLite"
requires-python = ">=3.10"
dependencies = []
keywords = ["poker", "club", "membership", "tournament", "rankings", "budget", "sqlite"]
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
    "Topic :: Office/Business",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pokerclub"]

[tool.hatch.build.targets.sdist]
include = ["pokerclub", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
