[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vaultkeeper"
version = "0.1.0"
description = "Password vault server building blocks: account and secret handlers, password hashing, event logging and daily activity reports"
requires-python = ">=3.10"
keywords = ["password", "vault", "logging", "report", "argon2"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: System :: Logging",
]
dependencies = [
    "pynacl",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
vaultkeeper-terminal = "vaultkeeper.terminal:main"

[tool.hatch.build.targets.wheel]
packages = ["vaultkeeper"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
