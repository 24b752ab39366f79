"""Tetrahedral and hexahedral meshes, geometry models, dense linear algebra and node-patch quality optimization."""

__version__ = "0.1.0"