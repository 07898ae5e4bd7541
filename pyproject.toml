[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dotstate"
version = "0.1.0"
description = "Building blocks for managing dotfiles: typed paths, serialization formats, persistent state, encryption, glob pattern sets and filesystem systems."
requires-python = ">=3.11"
keywords = ["dotfiles", "configuration", "filesystem", "state", "glob", "gpg"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]
dependencies = [
    "pyyaml",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["dotstate"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
