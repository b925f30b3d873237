[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slstatus"
version = "0.1.0"
description = "A small status monitor that gathers system information into one status line"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["status", "statusbar", "monitor", "system", "x11", "root-window"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
slstatus = "slstatus.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["slstatus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
