[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oxidizr"
version = "1.1.0"
description = "Replace essential system utilities such as coreutils and sudo with Rust-based alternatives on Fedora"
requires-python = ">=3.10"
dependencies = []
keywords = ["coreutils", "sudo-rs", "uutils", "fedora", "dnf", "system-administration"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
oxidizr = "oxidizr.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["oxidizr"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
