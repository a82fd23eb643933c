[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockirc"
version = "0.1.0"
description = "A block chain file reader with BLAKE2s links, and a small HTTP chat server and client"
requires-python = ">=3.10"
keywords = ["blockchain", "blake2s", "chat", "irc", "yaml", "flask", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Communications :: Chat",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]
dependencies = [
    "pyyaml",
    "flask",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
blockirc-chain = "blockirc.block.cli:main"
blockirc-server = "blockirc.irc.server:main"
blockirc-client = "blockirc.irc.client:main"

[tool.hatch.build.targets.wheel]
packages = ["blockirc"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
