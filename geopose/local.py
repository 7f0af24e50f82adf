"""Local tangent-plane composition.

Expresses a GeoPose in the East-North-Up frame of an arbitrary geodetic
origin and back. Both directions go through ECEF:

    target local -> ECEF -> origin ENU       (pose_to_local_enu)
    origin ENU -> ECEF -> target local        (local_enu_to_pose)

Orientation chain:
    q_origin_local = conj(q_enu->ecef(origin)) * q_enu->ecef(target) * q_target
"""

import numpy as np

from geopose.coords.quaternions import quat_multiply
from geopose.coords.rotations import ecef_to_enu_quat, enu_to_ecef_quat
from geopose.coords.transforms import ecef_to_enu, ecef_to_geodetic, enu_to_ecef, geodetic_to_ecef
from geopose.types import ECEF, ENU, GeoPose, LocalPose, Position, Quaternion


def pose_to_local_enu(pose: GeoPose, origin: Position) -> LocalPose:
    """Express a GeoPose relative to the ENU tangent plane at ``origin``.

    Args:
        pose: Target pose (orientation relative to its own ENU frame).
        origin: Geodetic origin of the tangent plane.

    Returns:
        LocalPose with the ENU offset of the target from the origin in
        meters and the target orientation relative to the origin ENU axes.

    Example:
        >>> origin = Position(lat=0.0, lon=0.0, h=0.0)
        >>> target = GeoPose(Position(lat=0.0, lon=0.0, h=10.0))
        >>> round(pose_to_local_enu(target, origin).position.up, 6)
        10.0
    """
    target_ecef = geodetic_to_ecef(pose)

    lat = np.deg2rad(origin.lat)
    lon = np.deg2rad(origin.lon)

    xyz = target_ecef.position
    enu = ecef_to_enu(xyz.x, xyz.y, xyz.z, lat, lon, origin.h)

    q_local = quat_multiply(ecef_to_enu_quat(lat, lon), target_ecef.orientation.to_array())

    return LocalPose(position=ENU.from_array(enu), orientation=Quaternion.from_array(q_local))


def local_enu_to_pose(enu: ENU, orientation: Quaternion, origin: Position) -> GeoPose:
    """Convert an offset and orientation in the ENU frame at ``origin`` to a GeoPose.

    Exact inverse of pose_to_local_enu. The geodetic position is
    re-derived through ECEF so earth curvature is accounted for.

    Args:
        enu: Offset from the origin in meters.
        orientation: Orientation relative to the origin ENU axes.
        origin: Geodetic origin of the tangent plane.

    Returns:
        GeoPose with orientation relative to the ENU frame at the new
        position.
    """
    lat = np.deg2rad(origin.lat)
    lon = np.deg2rad(origin.lon)

    target_xyz = enu_to_ecef(enu.east, enu.north, enu.up, lat, lon, origin.h)

    q_ecef = quat_multiply(enu_to_ecef_quat(lat, lon), orientation.to_array())

    return ecef_to_geodetic(ECEF.from_array(target_xyz), Quaternion.from_array(q_ecef))


def translate_pose(pose: GeoPose, translation: ENU) -> GeoPose:
    """Move a GeoPose by an offset in its own ENU frame.

    The pose position is the tangent-plane origin, so the orientation is
    preserved relative to the local frame.
    """
    return local_enu_to_pose(translation, pose.quaternion, pose.position)
