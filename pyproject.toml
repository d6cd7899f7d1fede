[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "torc"
version = "0.1.0"
description = "A small C++ package manager and build helper driven by a torc.yaml manifest"
requires-python = ">=3.10"
dependencies = []
keywords = ["c++", "package-manager", "build", "makefile", "compile_commands"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
torc = "torc.main:main"

[tool.hatch.build.targets.wheel]
packages = ["torc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
