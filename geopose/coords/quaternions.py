"""Quaternion algebra used by every orientation transform.

Quaternions are handled as numpy arrays in scalar-last order
q = [qx, qy, qz, qw], which matches the GeoPose interchange format.

Composition convention:
    multiply(a, b) is the Hamilton product a*b, i.e. "apply b, then a".
    A frame change R_A<-B applied to an orientation q_B is multiply(R, q).
"""

import logging

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

# Below this sin(theta/2) SLERP falls back to a component blend
SLERP_PARALLEL_THRESHOLD = 0.001

IDENTITY_QUAT = np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float64)


def _check_quat(q: NDArray[np.float64]) -> NDArray[np.float64]:
    q = np.asarray(q, dtype=np.float64)
    if q.shape != (4,):
        raise ValueError(f"Expected 4-element quaternion, got shape {q.shape}")
    return q


def quat_norm(q: NDArray[np.float64]) -> float:
    """Return the Euclidean magnitude of a quaternion."""
    q = _check_quat(q)
    return float(np.sqrt(np.dot(q, q)))


def quat_normalize(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Scale a quaternion to unit magnitude.

    A zero-magnitude input has no direction to preserve and maps to the
    identity rotation instead of dividing by zero.

    Args:
        q: Quaternion [qx, qy, qz, qw].

    Returns:
        Unit quaternion [qx, qy, qz, qw].

    Example:
        >>> quat_normalize(np.array([0.0, 0.0, 0.0, 2.0]))
        array([0., 0., 0., 1.])
        >>> quat_normalize(np.zeros(4))
        array([0., 0., 0., 1.])
    """
    q = _check_quat(q)
    mag = quat_norm(q)
    if mag == 0.0:
        return IDENTITY_QUAT.copy()
    return q / mag


def quat_multiply(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """Hamilton product a*b (apply b first, then a).

    Args:
        a: Left quaternion [qx, qy, qz, qw].
        b: Right quaternion [qx, qy, qz, qw].

    Returns:
        Product quaternion [qx, qy, qz, qw]. Not renormalized.
    """
    ax, ay, az, aw = _check_quat(a)
    bx, by, bz, bw = _check_quat(b)

    return np.array(
        [
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
            aw * bw - ax * bx - ay * by - az * bz,
        ],
        dtype=np.float64,
    )


def quat_conjugate(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Negate the vector part; this is the inverse of a unit quaternion."""
    x, y, z, w = _check_quat(q)
    return np.array([-x, -y, -z, w], dtype=np.float64)


def quat_dot(a: NDArray[np.float64], b: NDArray[np.float64]) -> float:
    return float(np.dot(_check_quat(a), _check_quat(b)))


def quat_slerp(
    qa: NDArray[np.float64],
    qb: NDArray[np.float64],
    t: float,
) -> NDArray[np.float64]:
    """Spherical linear interpolation between two unit quaternions.

    Takes the shorter arc by flipping ``qa`` when the quaternions lie in
    opposite hemispheres.

    Special cases:
        - |cos(theta/2)| >= 1: the rotations coincide and ``qa`` is
          returned unchanged.
        - sin(theta/2) < SLERP_PARALLEL_THRESHOLD: the equal-weight
          component blend of the two inputs is returned without
          renormalization. Its magnitude is slightly below one.

    Args:
        qa: Start quaternion [qx, qy, qz, qw] (t = 0).
        qb: End quaternion [qx, qy, qz, qw] (t = 1).
        t: Interpolation parameter, normally in [0, 1].

    Returns:
        Interpolated quaternion [qx, qy, qz, qw].
    """
    qa = _check_quat(qa)
    qb = _check_quat(qb)

    a = qa.copy()
    cos_half_theta = quat_dot(a, qb)

    if cos_half_theta < 0.0:
        a = -a
        cos_half_theta = -cos_half_theta

    if abs(cos_half_theta) >= 1.0:
        return qa.copy()

    half_theta = np.arccos(cos_half_theta)
    sin_half_theta = np.sqrt(1.0 - cos_half_theta * cos_half_theta)

    if abs(sin_half_theta) < SLERP_PARALLEL_THRESHOLD:
        # TODO: renormalize once a tolerance for the blended magnitude is agreed
        logger.debug("slerp: near-parallel inputs (sin=%.3e), blending", sin_half_theta)
        return 0.5 * a + 0.5 * qb

    ratio_a = np.sin((1.0 - t) * half_theta) / sin_half_theta
    ratio_b = np.sin(t * half_theta) / sin_half_theta

    return a * ratio_a + qb * ratio_b
