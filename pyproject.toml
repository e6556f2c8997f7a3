[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tcphttp"
version = "0.1.0"
description = "A small HTTP/1.1 server built directly on TCP sockets, with an incremental request parser and a stateful response writer."
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "tcp", "server", "parser", "sockets"]
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
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tcphttp-server = "tcphttp.httpserver:main"
tcphttp-listener = "tcphttp.tcplistener:main"

[tool.hatch.build.targets.wheel]
packages = ["tcphttp"]

[tool.pytest.ini_options]
addopts = "-ra"
