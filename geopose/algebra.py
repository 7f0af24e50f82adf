"""Pose algebra: relative poses and interpolation.

relative_pose / apply_relative_pose are thin compositions of the local
tangent-plane functions. interpolate_pose blends positions linearly in
ECEF (no antimeridian or pole discontinuities, unlike lat/lon blending)
and orientations by SLERP of the ECEF-relative quaternions.
"""

from geopose.coords.quaternions import quat_slerp
from geopose.coords.transforms import ecef_to_geodetic, geodetic_to_ecef
from geopose.local import local_enu_to_pose, pose_to_local_enu
from geopose.types import ECEF, GeoPose, Quaternion, RelativePose


def relative_pose(from_pose: GeoPose, to_pose: GeoPose) -> RelativePose:
    """Offset and rotation of ``to_pose`` expressed in the local frame of ``from_pose``.

    Args:
        from_pose: Reference pose whose position defines the ENU frame.
        to_pose: Pose to express relative to the reference.

    Returns:
        RelativePose with ENU translation (meters) and rotation relative
        to the ENU axes at ``from_pose.position``.
    """
    local = pose_to_local_enu(to_pose, from_pose.position)
    return RelativePose(translation=local.position, rotation=local.orientation)


def apply_relative_pose(base: GeoPose, relative: RelativePose) -> GeoPose:
    """Apply a RelativePose in the local frame of ``base``.

    Inverse of relative_pose: apply_relative_pose(a, relative_pose(a, b)) ≈ b.
    """
    return local_enu_to_pose(relative.translation, relative.rotation, base.position)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def interpolate_pose(from_pose: GeoPose, to_pose: GeoPose, t: float) -> GeoPose:
    """Interpolate between two GeoPoses.

    Args:
        from_pose: Pose at t = 0.
        to_pose: Pose at t = 1.
        t: Interpolation parameter, normally in [0, 1].

    Returns:
        Interpolated GeoPose.

    Example:
        >>> a = GeoPose(Position(lat=10.0, lon=20.0, h=0.0))
        >>> b = GeoPose(Position(lat=10.0, lon=20.0, h=100.0))
        >>> round(interpolate_pose(a, b, 0.5).position.h, 6)
        50.0
    """
    start = geodetic_to_ecef(from_pose)
    end = geodetic_to_ecef(to_pose)

    position = ECEF(
        x=lerp(start.position.x, end.position.x, t),
        y=lerp(start.position.y, end.position.y, t),
        z=lerp(start.position.z, end.position.z, t),
    )

    q = quat_slerp(start.orientation.to_array(), end.orientation.to_array(), t)

    return ecef_to_geodetic(position, Quaternion.from_array(q))
