[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gsfselect"
version = "0.1.0"
description = "Controller-driven full-screen browser for GSF/miniGSF music that drives an external playgsf player"
requires-python = ">=3.10"
keywords = ["gsf", "minigsf", "psf", "music", "player", "handheld", "gba", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gsfselect = "gsfselect.app:main"

[tool.hatch.build.targets.wheel]
packages = ["gsfselect"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
