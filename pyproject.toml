[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "heliumwallet"
version = "0.1.0"
description = "Wallet building blocks: password hashing, sharded key material, keypairs, codecs, memos and fee calculation"
requires-python = ">=3.10"
keywords = ["wallet", "cryptography", "shamir", "pbkdf2", "argon2", "base58", "ed25519", "fees"]
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
    "Topic :: Office/Business :: Financial",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "pynacl",
    "cryptography",
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "respx",
]

[tool.hatch.build.targets.wheel]
packages = ["heliumwallet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
