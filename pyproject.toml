[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "truco"
version = "0.1.0"
description = "Four-player Truco card game: rules engine, JSON packet protocol, TCP server with AI players and a console network client."
requires-python = ">=3.10"
dependencies = []
keywords = ["truco", "card game", "multiplayer", "tcp", "game server"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
truco = "truco.app:main"

[tool.setuptools.packages.find]
include = ["truco*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
