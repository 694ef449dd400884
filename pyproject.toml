[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pdunet"
version = "0.1.0"
description = "Length-prefixed PDU messaging over TCP: a polling echo server, an interactive client and socket helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "udp", "pdu", "sockets", "poll", "echo-server", "ipv6"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pdunet-server = "pdunet.server:main"
pdunet-client = "pdunet.client:main"

[tool.hatch.build.targets.wheel]
packages = ["pdunet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
