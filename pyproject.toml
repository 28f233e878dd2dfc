[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jcat"
version = "0.2.2"
description = "Read and write JSON catalog files of checksums and detached signatures"
requires-python = ">=3.10"
keywords = ["jcat", "signature", "checksum", "catalog", "binary-transparency"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["jcat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
