[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ethgo"
version = "0.1.3"
description = "Ethereum toolkit: checksummed addresses and hashes, hex encodings, keystores, EIP-712 typed data and a solc driver"
requires-python = ">=3.10"
keywords = ["ethereum", "keccak", "keystore", "eip712", "solidity", "web3"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "pycryptodome",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ethgo = "ethgo.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ethgo"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
