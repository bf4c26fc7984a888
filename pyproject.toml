[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "triplclust"
version = "1.3.0"
description = "Building blocks for curve detection in point clouds from triplets of nearly collinear points"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "point cloud",
    "clustering",
    "curve detection",
    "tracking",
    "triplets",
    "gnuplot",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["triplclust"]

[tool.pytest.ini_options]
addopts = "-ra"
