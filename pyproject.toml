[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "filepane"
version = "0.1.0"
description = "Core model of a terminal file manager: directory listings, history, key bindings, command parsing and configuration"
requires-python = ">=3.11"
dependencies = []
keywords = ["file manager", "terminal", "keybindings", "directory", "configuration"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: File Managers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["filepane"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"
