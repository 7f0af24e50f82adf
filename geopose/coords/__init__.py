"""Coordinate frames, rotations and quaternion algebra for GeoPose.

This package provides the numerical kernels behind every pose conversion:
- LLH (Latitude, Longitude, Height) geodetic coordinates
- ECEF (Earth-Centered Earth-Fixed) Cartesian coordinates
- ENU (East-North-Up) local tangent plane coordinates
- Rotation representations (quaternions, matrices, yaw/pitch/roll)
"""

from geopose.coords.quaternions import (
    quat_conjugate,
    quat_dot,
    quat_multiply,
    quat_norm,
    quat_normalize,
    quat_slerp,
)
from geopose.coords.rotations import (
    ecef_to_enu_matrix,
    ecef_to_enu_quat,
    enu_to_ecef_matrix,
    enu_to_ecef_quat,
    quat_to_rotation_matrix,
    quat_to_ypr,
    quaternion_to_ypr,
    rotate_vector,
    rotation_matrix_to_quat,
    ypr_to_quat,
    ypr_to_quaternion,
)
from geopose.coords.transforms import (
    WGS84,
    WGS84_A,
    WGS84_B,
    WGS84_E2,
    WGS84_F,
    ecef_to_enu,
    ecef_to_geodetic,
    ecef_to_llh,
    ecef_to_position,
    enu_to_ecef,
    geodetic_to_ecef,
    llh_to_ecef,
    position_to_ecef,
)

__all__ = [
    # Quaternion algebra
    "quat_conjugate",
    "quat_dot",
    "quat_multiply",
    "quat_norm",
    "quat_normalize",
    "quat_slerp",
    # Rotations
    "ecef_to_enu_matrix",
    "ecef_to_enu_quat",
    "enu_to_ecef_matrix",
    "enu_to_ecef_quat",
    "quat_to_rotation_matrix",
    "quat_to_ypr",
    "quaternion_to_ypr",
    "rotate_vector",
    "rotation_matrix_to_quat",
    "ypr_to_quat",
    "ypr_to_quaternion",
    # Transforms
    "WGS84",
    "WGS84_A",
    "WGS84_B",
    "WGS84_E2",
    "WGS84_F",
    "ecef_to_enu",
    "ecef_to_geodetic",
    "ecef_to_llh",
    "ecef_to_position",
    "enu_to_ecef",
    "geodetic_to_ecef",
    "llh_to_ecef",
    "position_to_ecef",
]
