"""Cell hierarchies and the radius-layer spatial index."""

from satgirgs.geometry.angle_helper import AngleHelper, CellHierarchy
from satgirgs.geometry.radius_layer import RadiusLayer

__all__ = ["AngleHelper", "CellHierarchy", "RadiusLayer"]
