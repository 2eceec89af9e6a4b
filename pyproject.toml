[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "dynmenu"
version = "5.0"
description = "A keyboard-driven menu that filters lines from standard input and prints the chosen one, plus a file-testing filter"
requires-python = ">=3.10"
dependencies = []
keywords = ["menu", "launcher", "filter", "stdin", "selector", "tkinter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dynmenu = "dynmenu.app:main"
dynmenu-stest = "dynmenu.stest:main"

[tool.setuptools.packages.find]
include = ["dynmenu*"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
