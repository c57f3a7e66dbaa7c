[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cinemactl"
version = "0.1.0"
description = "A small cinema manager: halls, showings, customers, tickets and a command shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["cinema", "tickets", "booking", "scheduling", "halls", "movies"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cinemactl = "cinemactl.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cinemactl"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
