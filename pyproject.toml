[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wbzconv"
version = "0.1.0"
description = "Convert Mario Kart Wii WBZ and WU8 track archives to and from U8 archives"
requires-python = ">=3.10"
dependencies = []
keywords = ["wbz", "wu8", "u8", "mario kart wii", "modding", "archive", "bzip2"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: File Formats",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wbzconv = "wbzconv.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["wbzconv"]

[tool.pytest.ini_options]
addopts = "-ra"
