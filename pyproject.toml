[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mplayer"
version = "0.1.0"
description = "Real-time Standard MIDI File player that streams events to a MIDI output port"
requires-python = ">=3.10"
keywords = ["midi", "player", "smf", "sequencer", "music"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
    "Topic :: Multimedia :: Sound/Audio :: Players",
]
dependencies = [
    "mido",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mplayer = "mplayer.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mplayer"]

[tool.pytest.ini_options]
addopts = "-ra"
