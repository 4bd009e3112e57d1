[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "meshsimplify"
version = "0.1.0"
description = "Approximate a PPM image with a triangle mesh and simplify it by edge collapse, writing SVG/HTML views"
requires-python = ">=3.10"
dependencies = []
keywords = ["mesh", "simplification", "edge collapse", "triangulation", "ppm", "svg", "priority queue"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
meshsimplify = "meshsimplify.cli:main"

[tool.setuptools.packages.find]
include = ["meshsimplify*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
