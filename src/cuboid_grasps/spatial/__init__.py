"""Import classes and definitions representing 3D coordinate frames, poses, and rotations."""

from .distances import angle_between_axes_rad as angle_between_axes_rad
from .distances import angle_between_vectors_rad as angle_between_vectors_rad
from .distances import euclidean_distance_3d_m as euclidean_distance_3d_m
from .frames import DEFAULT_FRAME as DEFAULT_FRAME
from .poses import XYZ_RPY as XYZ_RPY
from .poses import AxisRotation as AxisRotation
from .poses import Pose3D as Pose3D
from .poses import compose_pose as compose_pose
from .rotations import RPY as RPY
from .rotations import Axis as Axis
from .rotations import Quaternion as Quaternion
