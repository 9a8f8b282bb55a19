"""Import classes and definitions representing pure geometric primitives."""

from .cuboids import Cuboid as Cuboid
from .intersections import line_box_face_intersection as line_box_face_intersection
from .intersections import segment_intersects_cuboid as segment_intersects_cuboid
from .points import Point3D as Point3D
