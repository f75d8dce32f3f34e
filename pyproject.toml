[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tlasca"
version = "0.1.0"
description = "Temporal laser speckle contrast analysis of PNG image sequences"
requires-python = ">=3.10"
keywords = ["speckle", "laser speckle contrast", "tLASCA", "image processing", "imaging"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tlasca = "tlasca.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tlasca"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
