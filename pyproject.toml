[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zydeco"
version = "0.2.0"
description = "Stack-machine runtime, primitive library and project tooling for the Zydeco call-by-push-value language"
requires-python = ">=3.11"
dependencies = []
keywords = ["zydeco", "call-by-push-value", "interpreter", "stack-machine", "cps"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zydeco"]

[tool.pytest.ini_options]
addopts = "-ra"
