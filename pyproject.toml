[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ofmesh"
version = "0.1.0"
description = "Tetrahedral and hexahedral meshes, geometry models, small dense linear algebra and node-patch mesh quality optimization"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "mesh",
    "tetrahedron",
    "hexahedron",
    "mesh refinement",
    "mesh optimization",
    "geometry",
    "linear algebra",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ofmesh"]

[tool.pytest.ini_options]
addopts = "-ra"
