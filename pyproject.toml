[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mcuutils"
version = "1.0.0"
description = "Small embedded-style utilities: error reporting, levelled logging and power-of-two ring FIFOs"
requires-python = ">=3.10"
dependencies = []
keywords = ["fifo", "ring buffer", "kfifo", "record fifo", "logging", "error handling", "embedded"]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mcuutils-kfifo-demo = "mcuutils.kfifo_demo:main"

[tool.hatch.build.targets.wheel]
packages = ["mcuutils"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
