[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskrunner"
version = "0.1.0"
description = "Building blocks for a YAML task runner: shell commands, source fingerprinting, run hashes, task listing and a signal-testing sleep command"
requires-python = ">=3.10"
dependencies = []
keywords = ["task", "runner", "build", "make", "taskfile", "automation", "fingerprint"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sleepit = "taskrunner.sleepit:main"

[tool.hatch.build.targets.wheel]
packages = ["taskrunner"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
