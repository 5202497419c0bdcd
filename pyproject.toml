[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reelshell"
version = "0.1.0"
description = "A movie database explorer (hash table, director skip list, actor graph) and a tiny job-control shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["movies", "hash-table", "skip-list", "graph", "shell", "job-control"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
reelshell-movies = "reelshell.moviecli:main"
tsh = "reelshell.shell:main"
myspin = "reelshell.testprogs:spin_main"
mysplit = "reelshell.testprogs:split_main"
mystop = "reelshell.testprogs:stop_main"
myint = "reelshell.testprogs:int_main"

[tool.hatch.build.targets.wheel]
packages = ["reelshell"]

[tool.pytest.ini_options]
addopts = "-ra"
