"""Coordinate transformations between LLH, ECEF, and ENU frames.

This module implements transformations between geodetic (LLH),
Earth-Centered Earth-Fixed (ECEF), and local East-North-Up (ENU)
coordinate systems, both for bare positions (radians, numpy arrays) and
for GeoPose values (degrees, orientation re-based between the local ENU
frame and the ECEF axes).

WGS84 ellipsoid parameters:
- Semi-major axis (a): 6378137.0 m
- Flattening (f): 1/298.257223563
- Semi-minor axis (b): 6356752.314245 m
- First eccentricity squared (e²): 0.00669437999014
"""

import numpy as np
from numpy.typing import NDArray

from geopose.coords.quaternions import quat_multiply
from geopose.coords.rotations import (
    ecef_to_enu_matrix,
    ecef_to_enu_quat,
    enu_to_ecef_matrix,
    enu_to_ecef_quat,
)
from geopose.types import ECEF, EcefPose, GeoPose, Position, Quaternion

# WGS84 ellipsoid parameters
WGS84_A = 6378137.0  # Semi-major axis (m)
WGS84_F = 1.0 / 298.257223563  # Flattening
WGS84_B = WGS84_A * (1.0 - WGS84_F)  # Semi-minor axis (m)
WGS84_E2 = 1.0 - (WGS84_B / WGS84_A) ** 2  # First eccentricity squared
WGS84_E = np.sqrt(WGS84_E2)  # First eccentricity

WGS84 = {
    "a": WGS84_A,
    "b": WGS84_B,
    "f": WGS84_F,
    "e": WGS84_E,
    "e2": WGS84_E2,
}

# Fixed refinement count for ecef_to_llh (sub-millimeter at terrestrial heights)
ECEF_TO_LLH_ITERATIONS = 5


def llh_to_ecef(
    lat: float,
    lon: float,
    height: float,
) -> NDArray[np.float64]:
    """Convert geodetic coordinates (LLH) to ECEF Cartesian coordinates.

    Args:
        lat: Latitude in radians (positive north).
        lon: Longitude in radians (positive east).
        height: Height above WGS84 ellipsoid in meters.

    Returns:
        ECEF coordinates as numpy array [x, y, z] in meters.

    Example:
        >>> xyz = llh_to_ecef(0.0, 0.0, 0.0)
        >>> print(xyz)  # [6378137. 0. 0.]
    """
    # Radius of curvature in the prime vertical
    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    N = WGS84_A / np.sqrt(1.0 - WGS84_E2 * sin_lat**2)

    x = (N + height) * cos_lat * np.cos(lon)
    y = (N + height) * cos_lat * np.sin(lon)
    z = (N * (1.0 - WGS84_E2) + height) * sin_lat

    return np.array([x, y, z], dtype=np.float64)


def ecef_to_llh(
    x: float,
    y: float,
    z: float,
) -> NDArray[np.float64]:
    """Convert ECEF Cartesian coordinates to geodetic coordinates (LLH).

    Fixed-point refinement of latitude and height, run for exactly
    ECEF_TO_LLH_ITERATIONS steps without a convergence test.

    Args:
        x: ECEF x-coordinate in meters.
        y: ECEF y-coordinate in meters.
        z: ECEF z-coordinate in meters.

    Returns:
        Geodetic coordinates as numpy array [lat, lon, height] where
        lat and lon are in radians, height is in meters.

    Example:
        >>> xyz = np.array([3980574.247, 0.0, 4966824.522])
        >>> llh = ecef_to_llh(*xyz)
        >>> print(f"LLH: lat={np.rad2deg(llh[0]):.4f}°, "
        ...       f"lon={np.rad2deg(llh[1]):.4f}°, h={llh[2]:.2f}m")
    """
    # Longitude (exact)
    lon = np.arctan2(y, x)

    # Distance from z-axis
    p = np.sqrt(x**2 + y**2)

    # On the polar axis cos(lat) vanishes and h = p/cos(lat) - N is undefined
    if p < 1e-10:
        lat = np.copysign(np.pi / 2.0, z)
        height = abs(z) - WGS84_B
        return np.array([lat, lon, height], dtype=np.float64)

    # Initial latitude estimate (assumes height = 0)
    lat = np.arctan2(z, p * (1.0 - WGS84_E2))
    height = 0.0

    for _ in range(ECEF_TO_LLH_ITERATIONS):
        sin_lat = np.sin(lat)
        N = WGS84_A / np.sqrt(1.0 - WGS84_E2 * sin_lat**2)
        height = p / np.cos(lat) - N
        lat = np.arctan2(z, p * (1.0 - WGS84_E2 * N / (N + height)))

    return np.array([lat, lon, height], dtype=np.float64)


def ecef_to_enu(
    x: float,
    y: float,
    z: float,
    lat_ref: float,
    lon_ref: float,
    height_ref: float,
) -> NDArray[np.float64]:
    """Convert ECEF coordinates to local ENU coordinates.

    Args:
        x: ECEF x-coordinate in meters.
        y: ECEF y-coordinate in meters.
        z: ECEF z-coordinate in meters.
        lat_ref: Reference latitude in radians (origin of ENU frame).
        lon_ref: Reference longitude in radians (origin of ENU frame).
        height_ref: Reference height in meters (origin of ENU frame).

    Returns:
        ENU coordinates as numpy array [east, north, up] in meters.
    """
    xyz_ref = llh_to_ecef(lat_ref, lon_ref, height_ref)
    delta = np.array([x, y, z], dtype=np.float64) - xyz_ref

    return ecef_to_enu_matrix(lat_ref, lon_ref) @ delta


def enu_to_ecef(
    east: float,
    north: float,
    up: float,
    lat_ref: float,
    lon_ref: float,
    height_ref: float,
) -> NDArray[np.float64]:
    """Convert local ENU coordinates to ECEF coordinates.

    Args:
        east: East coordinate in meters.
        north: North coordinate in meters.
        up: Up coordinate in meters.
        lat_ref: Reference latitude in radians (origin of ENU frame).
        lon_ref: Reference longitude in radians (origin of ENU frame).
        height_ref: Reference height in meters (origin of ENU frame).

    Returns:
        ECEF coordinates as numpy array [x, y, z] in meters.
    """
    xyz_ref = llh_to_ecef(lat_ref, lon_ref, height_ref)
    dxyz = enu_to_ecef_matrix(lat_ref, lon_ref) @ np.array([east, north, up], dtype=np.float64)

    return xyz_ref + dxyz


def geodetic_to_ecef(pose: GeoPose) -> EcefPose:
    """Convert a GeoPose to ECEF position and ECEF-relative orientation.

    The pose orientation is relative to the local ENU frame; it is
    re-based onto the ECEF axes by pre-multiplying with the ENU->ECEF
    rotation at the pose position.

    Args:
        pose: Basic-Quaternion GeoPose (degrees, meters).

    Returns:
        EcefPose with position in meters and orientation relative to the
        ECEF axes.

    Example:
        >>> pose = GeoPose(Position(lat=0.0, lon=0.0, h=0.0))
        >>> geodetic_to_ecef(pose).position
        ECEF(x=6378137.0, y=0.0, z=0.0)
    """
    lat = np.deg2rad(pose.position.lat)
    lon = np.deg2rad(pose.position.lon)

    xyz = llh_to_ecef(lat, lon, pose.position.h)

    q_global = quat_multiply(enu_to_ecef_quat(lat, lon), pose.quaternion.to_array())

    return EcefPose(position=ECEF.from_array(xyz), orientation=Quaternion.from_array(q_global))


def ecef_to_geodetic(position: ECEF, orientation: Quaternion) -> GeoPose:
    """Convert an ECEF position and ECEF-relative orientation to a GeoPose.

    The orientation is re-based into the ENU frame at the recovered
    latitude/longitude.

    Args:
        position: ECEF position in meters.
        orientation: Orientation relative to the ECEF axes.

    Returns:
        Basic-Quaternion GeoPose (degrees, meters).
    """
    lat, lon, height = ecef_to_llh(position.x, position.y, position.z)

    q_local = quat_multiply(ecef_to_enu_quat(lat, lon), orientation.to_array())

    return GeoPose(
        position=Position(
            lat=float(np.rad2deg(lat)),
            lon=float(np.rad2deg(lon)),
            h=float(height),
        ),
        quaternion=Quaternion.from_array(q_local),
    )


def position_to_ecef(position: Position) -> ECEF:
    """Convert a geodetic Position (degrees) to an ECEF point."""
    xyz = llh_to_ecef(np.deg2rad(position.lat), np.deg2rad(position.lon), position.h)
    return ECEF.from_array(xyz)


def ecef_to_position(point: ECEF) -> Position:
    """Convert an ECEF point to a geodetic Position (degrees)."""
    lat, lon, height = ecef_to_llh(point.x, point.y, point.z)
    return Position(lat=float(np.rad2deg(lat)), lon=float(np.rad2deg(lon)), h=float(height))
