"""GeoPose conversion and composition engine.

This package converts OGC GeoPose values between representations and
composes them:
- coords: quaternion algebra, rotations, WGS84 LLH/ECEF/ENU transforms
- local: poses relative to a local ENU tangent plane
- algebra: relative poses and interpolation
- projected: planar (e.g. UTM) poses through pyproj
- serialization: JSON interchange format and validation
- basic: GeoPoseBasic immutable convenience wrapper
"""

import logging

from geopose.algebra import apply_relative_pose, interpolate_pose, relative_pose
from geopose.basic import GeoPoseBasic
from geopose.coords.quaternions import (
    quat_conjugate,
    quat_multiply,
    quat_normalize,
    quat_slerp,
)
from geopose.coords.rotations import quaternion_to_ypr, ypr_to_quaternion
from geopose.coords.transforms import WGS84, ecef_to_geodetic, geodetic_to_ecef
from geopose.local import local_enu_to_pose, pose_to_local_enu, translate_pose
from geopose.projected import (
    is_crs_supported,
    pose_to_projected,
    position_to_projected,
    projected_to_pose,
    projected_to_position,
    register_crs,
    transform_projected_pose,
    utm_zone_for,
    utm_zone_for_pose,
)
from geopose.serialization import (
    deserialize_geopose,
    deserialize_geopose_array,
    deserialize_geopose_ypr,
    deserialize_pose,
    is_valid_geopose_json,
    is_valid_geopose_ypr_json,
    is_valid_pose,
    normalize_geopose,
    serialize_geopose,
    serialize_geopose_array,
    serialize_geopose_ypr,
    validate_geopose,
    validate_geopose_ypr,
)
from geopose.types import (
    ECEF,
    ENU,
    EcefPose,
    GeoPose,
    GeoPoseYPR,
    LocalPose,
    Position,
    ProjectedPose,
    ProjectedPosition,
    Quaternion,
    RelativePose,
    ValidationResult,
    YPRAngles,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Types
    "ECEF",
    "ENU",
    "EcefPose",
    "GeoPose",
    "GeoPoseBasic",
    "GeoPoseYPR",
    "LocalPose",
    "Position",
    "ProjectedPose",
    "ProjectedPosition",
    "Quaternion",
    "RelativePose",
    "ValidationResult",
    "YPRAngles",
    "WGS84",
    # Quaternion algebra
    "quat_conjugate",
    "quat_multiply",
    "quat_normalize",
    "quat_slerp",
    # Conversions
    "ypr_to_quaternion",
    "quaternion_to_ypr",
    "geodetic_to_ecef",
    "ecef_to_geodetic",
    "pose_to_local_enu",
    "local_enu_to_pose",
    "translate_pose",
    # Pose algebra
    "relative_pose",
    "apply_relative_pose",
    "interpolate_pose",
    # Projection
    "position_to_projected",
    "projected_to_position",
    "pose_to_projected",
    "projected_to_pose",
    "transform_projected_pose",
    "utm_zone_for",
    "utm_zone_for_pose",
    "register_crs",
    "is_crs_supported",
    # Serialization
    "serialize_geopose",
    "serialize_geopose_ypr",
    "serialize_geopose_array",
    "deserialize_geopose",
    "deserialize_geopose_ypr",
    "deserialize_geopose_array",
    "deserialize_pose",
    "is_valid_geopose_json",
    "is_valid_geopose_ypr_json",
    "validate_geopose",
    "validate_geopose_ypr",
    "is_valid_pose",
    "normalize_geopose",
]
