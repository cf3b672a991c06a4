[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ergoapp"
version = "0.0.3"
description = "BLAKE2b hashing, a recording hasher and APDU protocol definitions for an Ergo signing application"
requires-python = ">=3.10"
dependencies = []
keywords = ["ergo", "blake2b", "apdu", "hash", "status-word"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ergoapp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
