[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gitdomain"
version = "0.3.0"
description = "Git repository domain model: identifiers, aggregates, commands, events, dependency analysis and caching"
requires-python = ">=3.10"
dependencies = []
keywords = ["git", "domain", "event-sourcing", "dependencies", "cache"]
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
    "Topic :: Software Development :: Version Control :: Git",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gitdomain"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
