[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "omokboard"
version = "0.1.0"
description = "Two-player networked omok with a TCP game server and a framebuffer touchscreen client"
requires-python = ">=3.10"
dependencies = []
keywords = ["omok", "gomoku", "board game", "framebuffer", "touchscreen", "tcp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
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
omok-server = "omokboard.server:main"
omok-client = "omokboard.client:main"

[tool.hatch.build.targets.wheel]
packages = ["omokboard"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
