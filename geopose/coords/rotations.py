"""Rotation representations and frame rotations.

This module converts between yaw/pitch/roll angles, quaternions and
rotation matrices, and derives the rotation between the local ENU frame
and the global ECEF axes at a geodetic point.

Conventions:
- Quaternions: [qx, qy, qz, qw] where qw is the scalar part
- Yaw/pitch/roll: degrees, Z-Y-X intrinsic sequence
  - Yaw: rotation about z (up) axis
  - Pitch: rotation about y axis
  - Roll: rotation about x axis
- Latitude/longitude passed to the frame rotations are in radians
- Rotation matrices: 3x3 numpy arrays, v_to = R @ v_from
"""

import logging
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from geopose.coords.quaternions import quat_conjugate, quat_multiply
from geopose.types import GeoPose, GeoPoseYPR, Quaternion, YPRAngles

logger = logging.getLogger(__name__)


def ypr_to_quat(
    yaw: float,
    pitch: float,
    roll: float,
) -> NDArray[np.float64]:
    """Convert yaw/pitch/roll angles to a unit quaternion.

    Args:
        yaw: Yaw angle in degrees (0 = North, 90 = East).
        pitch: Pitch angle in degrees (positive up).
        roll: Roll angle in degrees (positive right-bank).

    Returns:
        Unit quaternion as numpy array [qx, qy, qz, qw].

    Example:
        >>> q = ypr_to_quat(90.0, 0.0, 0.0)
        >>> np.round(q, 4)
        array([0.    , 0.    , 0.7071, 0.7071])
    """
    yaw_r = np.deg2rad(yaw)
    pitch_r = np.deg2rad(pitch)
    roll_r = np.deg2rad(roll)

    cy = np.cos(yaw_r / 2.0)
    sy = np.sin(yaw_r / 2.0)
    cp = np.cos(pitch_r / 2.0)
    sp = np.sin(pitch_r / 2.0)
    cr = np.cos(roll_r / 2.0)
    sr = np.sin(roll_r / 2.0)

    qw = cr * cp * cy + sr * sp * sy
    qx = sr * cp * cy - cr * sp * sy
    qy = cr * sp * cy + sr * cp * sy
    qz = cr * cp * sy - sr * sp * cy

    return np.array([qx, qy, qz, qw], dtype=np.float64)


def quat_to_ypr(q: NDArray[np.float64]) -> Tuple[float, float, float]:
    """Convert a quaternion to yaw/pitch/roll angles.

    At gimbal lock (|sin(pitch)| >= 1) pitch is set to +-90 degrees from
    the sign of the argument; yaw and roll are then coupled and only their
    combination is meaningful.

    Args:
        q: Unit quaternion as numpy array [qx, qy, qz, qw].

    Returns:
        Tuple (yaw, pitch, roll) in degrees.

    Raises:
        ValueError: If q is not a 4-element array.
    """
    q = np.asarray(q, dtype=np.float64)
    if q.shape != (4,):
        raise ValueError(f"Expected 4-element quaternion, got shape {q.shape}")

    qx, qy, qz, qw = q

    # Roll
    sin_roll_cos_pitch = 2.0 * (qw * qx + qy * qz)
    cos_roll_cos_pitch = 1.0 - 2.0 * (qx * qx + qy * qy)
    roll = np.arctan2(sin_roll_cos_pitch, cos_roll_cos_pitch)

    # Pitch
    sin_pitch = 2.0 * (qw * qy - qz * qx)
    if abs(sin_pitch) >= 1.0:
        logger.debug("quat_to_ypr: gimbal lock (sin(pitch)=%.17g)", sin_pitch)
        pitch = np.copysign(np.pi / 2.0, sin_pitch)
    else:
        pitch = np.arcsin(sin_pitch)

    # Yaw
    sin_yaw_cos_pitch = 2.0 * (qw * qz + qx * qy)
    cos_yaw_cos_pitch = 1.0 - 2.0 * (qy * qy + qz * qz)
    yaw = np.arctan2(sin_yaw_cos_pitch, cos_yaw_cos_pitch)

    return float(np.rad2deg(yaw)), float(np.rad2deg(pitch)), float(np.rad2deg(roll))


def ypr_to_quaternion(pose: GeoPoseYPR) -> GeoPose:
    """Convert a Basic-YPR GeoPose to Basic-Quaternion.

    Example:
        >>> pose = GeoPoseYPR(Position(0.0, 0.0, 0.0), YPRAngles(yaw=90.0))
        >>> ypr_to_quaternion(pose).quaternion.z  # sin(45°)
        0.7071067811865476
    """
    q = ypr_to_quat(pose.angles.yaw, pose.angles.pitch, pose.angles.roll)
    return GeoPose(position=pose.position, quaternion=Quaternion.from_array(q))


def quaternion_to_ypr(pose: GeoPose) -> GeoPoseYPR:
    """Convert a Basic-Quaternion GeoPose to Basic-YPR (degrees)."""
    yaw, pitch, roll = quat_to_ypr(pose.quaternion.to_array())
    return GeoPoseYPR(position=pose.position, angles=YPRAngles(yaw=yaw, pitch=pitch, roll=roll))


def quat_to_rotation_matrix(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert a unit quaternion [qx, qy, qz, qw] to a 3x3 rotation matrix.

    Raises:
        ValueError: If q is not a 4-element array.
    """
    q = np.asarray(q, dtype=np.float64)
    if q.shape != (4,):
        raise ValueError(f"Expected 4-element quaternion, got shape {q.shape}")

    qx, qy, qz, qw = q

    R = np.array(
        [
            [
                1.0 - 2.0 * (qy * qy + qz * qz),
                2.0 * (qx * qy - qw * qz),
                2.0 * (qx * qz + qw * qy),
            ],
            [
                2.0 * (qx * qy + qw * qz),
                1.0 - 2.0 * (qx * qx + qz * qz),
                2.0 * (qy * qz - qw * qx),
            ],
            [
                2.0 * (qx * qz - qw * qy),
                2.0 * (qy * qz + qw * qx),
                1.0 - 2.0 * (qx * qx + qy * qy),
            ],
        ],
        dtype=np.float64,
    )

    return R


def rotation_matrix_to_quat(R: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert rotation matrix to quaternion.

    Extracts a unit quaternion from a 3x3 rotation matrix using
    Shepperd's method: the trace formula when the trace is positive,
    otherwise the formula keyed to the largest diagonal element so the
    divisor never approaches zero.

    Args:
        R: 3x3 rotation matrix (orthogonal matrix in SO(3)).

    Returns:
        Unit quaternion as numpy array [qx, qy, qz, qw].

    Raises:
        ValueError: If R is not a 3x3 matrix.

    Example:
        >>> R = np.eye(3)  # Identity rotation
        >>> q = rotation_matrix_to_quat(R)
        >>> print(f"Quaternion: {q}")  # Should be [0, 0, 0, 1]
    """
    R = np.asarray(R, dtype=np.float64)
    if R.shape != (3, 3):
        raise ValueError(f"Expected 3x3 matrix, got shape {R.shape}")

    trace = np.trace(R)

    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        qw = 0.25 / s
        qx = (R[2, 1] - R[1, 2]) * s
        qy = (R[0, 2] - R[2, 0]) * s
        qz = (R[1, 0] - R[0, 1]) * s
    elif R[0, 0] > R[1, 1] and R[0, 0] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        qw = (R[2, 1] - R[1, 2]) / s
        qx = 0.25 * s
        qy = (R[0, 1] + R[1, 0]) / s
        qz = (R[0, 2] + R[2, 0]) / s
    elif R[1, 1] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
        qw = (R[0, 2] - R[2, 0]) / s
        qx = (R[0, 1] + R[1, 0]) / s
        qy = 0.25 * s
        qz = (R[1, 2] + R[2, 1]) / s
    else:
        s = 2.0 * np.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
        qw = (R[1, 0] - R[0, 1]) / s
        qx = (R[0, 2] + R[2, 0]) / s
        qy = (R[1, 2] + R[2, 1]) / s
        qz = 0.25 * s

    q = np.array([qx, qy, qz, qw], dtype=np.float64)

    # Normalize to ensure unit quaternion
    q = q / np.linalg.norm(q)

    return q


def enu_to_ecef_matrix(lat: float, lon: float) -> NDArray[np.float64]:
    """Rotation matrix taking ENU vectors at (lat, lon) to ECEF vectors.

    The columns are the East, North and Up unit vectors expressed in the
    ECEF basis.

    Args:
        lat: Latitude in radians.
        lon: Longitude in radians.

    Returns:
        3x3 matrix R such that v_ecef = R @ v_enu.
    """
    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    sin_lon = np.sin(lon)
    cos_lon = np.cos(lon)

    return np.array(
        [
            [-sin_lon, -sin_lat * cos_lon, cos_lat * cos_lon],
            [cos_lon, -sin_lat * sin_lon, cos_lat * sin_lon],
            [0.0, cos_lat, sin_lat],
        ],
        dtype=np.float64,
    )


def ecef_to_enu_matrix(lat: float, lon: float) -> NDArray[np.float64]:
    """Rotation matrix taking ECEF vectors to ENU at (lat, lon) (radians)."""
    return enu_to_ecef_matrix(lat, lon).T


def enu_to_ecef_quat(lat: float, lon: float) -> NDArray[np.float64]:
    """Quaternion of the ENU->ECEF rotation at (lat, lon) in radians."""
    return rotation_matrix_to_quat(enu_to_ecef_matrix(lat, lon))


def ecef_to_enu_quat(lat: float, lon: float) -> NDArray[np.float64]:
    """Quaternion of the ECEF->ENU rotation at (lat, lon) in radians.

    Always the exact conjugate of enu_to_ecef_quat (same sign), so
    re-basing ENU -> ECEF -> ENU returns the original components.
    """
    return quat_conjugate(enu_to_ecef_quat(lat, lon))


def rotate_vector(q: NDArray[np.float64], v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Rotate a 3-vector by a unit quaternion (q * v * q^-1)."""
    v = np.asarray(v, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"Expected 3-element vector, got shape {v.shape}")
    p = np.array([v[0], v[1], v[2], 0.0], dtype=np.float64)
    return quat_multiply(quat_multiply(q, p), quat_conjugate(q))[:3]
