"""Define intersection tests between line segments and axis-aligned cuboid faces."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cuboid_grasps.geometry.points import Point3D

if TYPE_CHECKING:
    from cuboid_grasps.spatial.poses import Pose3D


def line_box_face_intersection(
    t: float,
    u1: float,
    v1: float,
    u2: float,
    v2: float,
    a: float,
    b: float,
) -> bool:
    """Evaluate whether a segment crosses one rectangular face of an axis-aligned box.

    The face is centered on the origin of its plane with extents a (along u) and b (along v).

    :param t: Segment parameter at which the segment crosses the face's plane
    :param u1: First endpoint's coordinate along the face's u-axis
    :param v1: First endpoint's coordinate along the face's v-axis
    :param u2: Second endpoint's coordinate along the face's u-axis
    :param v2: Second endpoint's coordinate along the face's v-axis
    :param a: Extent of the face along its u-axis
    :param b: Extent of the face along its v-axis
    :return: True if t is in [0, 1] and the crossing point lies on the face (boundary included)
    """
    if not 0.0 <= t <= 1.0:
        return False

    u = u1 + t * (u2 - u1)
    v = v1 + t * (v2 - v1)
    return -a / 2.0 <= u <= a / 2.0 and -b / 2.0 <= v <= b / 2.0


def _plane_crossing(start: float, end: float, plane: float) -> float | None:
    """Solve for the segment parameter at which a coordinate reaches a plane (None if parallel)."""
    if end == start:
        return None
    return (plane - start) / (end - start)


def segment_intersects_cuboid(
    cuboid_pose: Pose3D,
    depth: float,
    width: float,
    height: float,
    candidate_pose: Pose3D,
    approach_depth: float,
) -> bool:
    """Evaluate whether a candidate's approach segment passes through a cuboid's surface.

    The segment runs from the candidate's origin to `approach_depth` along its local z-axis.
        Both endpoints are expressed in the cuboid's frame, then tested against its six faces.

    :param cuboid_pose: Pose of the cuboid's centroid
    :param depth: Extent of the cuboid along its local x-axis
    :param width: Extent of the cuboid along its local y-axis
    :param height: Extent of the cuboid along its local z-axis
    :param candidate_pose: Candidate grasp pose whose local z-axis is the approach direction
    :param approach_depth: Length (m) of the approach segment
    :return: True on the first face crossed by the segment, else False
    """
    approach = candidate_pose.orientation.rotate_vector([0.0, 0.0, approach_depth])
    point_a = candidate_pose.position
    point_b = Point3D.from_array(point_a.to_array() + approach)

    cuboid_from_ref = cuboid_pose.inverse("cuboid")
    ax, ay, az = (cuboid_from_ref @ point_a).to_tuple()
    bx, by, bz = (cuboid_from_ref @ point_b).to_tuple()

    # Each face: (segment start/end along the face normal, plane offset, in-plane coords, extents)
    faces = (
        (az, bz, height / 2.0, (ax, ay, bx, by), (depth, width)),
        (az, bz, -height / 2.0, (ax, ay, bx, by), (depth, width)),
        (ay, by, width / 2.0, (ax, az, bx, bz), (depth, height)),
        (ay, by, -width / 2.0, (ax, az, bx, bz), (depth, height)),
        (ax, bx, depth / 2.0, (ay, az, by, bz), (width, height)),
        (ax, bx, -depth / 2.0, (ay, az, by, bz), (width, height)),
    )

    for start, end, plane, (u1, v1, u2, v2), (a, b) in faces:
        t = _plane_crossing(start, end, plane)
        if t is not None and line_box_face_intersection(t, u1, v1, u2, v2, a, b):
            return True

    return False
