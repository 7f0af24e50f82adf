"""Projected coordinate system transforms.

Converts between GeoPose (WGS84 geodetic) and planar poses in a projected
CRS such as UTM, delegating the projection math to pyproj.

Only the position is projected. The orientation quaternion passes through
unchanged, which assumes the projected axes are locally aligned with
East/North. For UTM this holds on the central meridian and degrades with
grid convergence (about 1 degree at 3 degrees of longitude off-meridian
at mid latitudes).

CRS identifiers are any string pyproj accepts (e.g. "EPSG:32632").
Custom definitions can be registered under an identifier with
register_crs. Unknown identifiers raise pyproj.exceptions.CRSError.
"""

import logging
import math
import threading
import warnings
from typing import Dict, Tuple

from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError

from geopose.types import GeoPose, Position, ProjectedPose, ProjectedPosition

logger = logging.getLogger(__name__)

WGS84_GEOGRAPHIC = "EPSG:4326"

UTM_NORTH_BASE = 32600
UTM_SOUTH_BASE = 32700

_registry: Dict[str, str] = {}
_registry_lock = threading.Lock()
_registry_version = 0

# pyproj Transformer objects must not be shared between threads
_local = threading.local()


def register_crs(epsg: str, definition: str) -> None:
    """Register a custom CRS definition under an identifier.

    Args:
        epsg: Identifier used in later calls, e.g. "EPSG:32632".
        definition: PROJ string, WKT or any input accepted by
            pyproj.CRS.from_user_input.

    Raises:
        pyproj.exceptions.CRSError: If the definition cannot be parsed.

    Example:
        >>> register_crs("EPSG:32632", "+proj=utm +zone=32 +datum=WGS84 +units=m +no_defs")
    """
    global _registry_version

    # Fail before touching the registry
    CRS.from_user_input(definition)

    with _registry_lock:
        existing = _registry.get(epsg)
        if existing == definition:
            return
        if existing is not None:
            warnings.warn(
                f"Replacing CRS definition for {epsg!r}",
                RuntimeWarning,
                stacklevel=2,
            )
        _registry[epsg] = definition
        _registry_version += 1

    logger.debug("registered CRS %s: %s", epsg, definition)


def _resolve_crs(epsg: str) -> CRS:
    with _registry_lock:
        definition = _registry.get(epsg, epsg)
    return CRS.from_user_input(definition)


def is_crs_supported(epsg: str) -> bool:
    """Return True if ``epsg`` is registered or known to pyproj."""
    try:
        _resolve_crs(epsg)
    except CRSError:
        return False
    return True


def _get_transformer(source: str, target: str) -> Transformer:
    cache = getattr(_local, "cache", None)
    if cache is None or getattr(_local, "version", None) != _registry_version:
        cache = {}
        _local.cache = cache
        _local.version = _registry_version

    key = (source, target)
    transformer = cache.get(key)
    if transformer is None:
        transformer = Transformer.from_crs(
            _resolve_crs(source),
            _resolve_crs(target),
            always_xy=True,
        )
        cache[key] = transformer
    return transformer


def _transform(source: str, target: str, a: float, b: float) -> Tuple[float, float]:
    transformer = _get_transformer(source, target)
    u, v = transformer.transform(a, b, errcheck=True)
    return float(u), float(v)


def position_to_projected(lat: float, lon: float, h: float, epsg: str) -> ProjectedPosition:
    """Project a WGS84 position into a planar CRS.

    Args:
        lat: Latitude in degrees (WGS84).
        lon: Longitude in degrees (WGS84).
        h: Height in meters above the WGS84 ellipsoid; passed through.
        epsg: Target CRS identifier, e.g. "EPSG:32632" for UTM zone 32N.

    Returns:
        ProjectedPosition with easting, northing and height.

    Raises:
        pyproj.exceptions.CRSError: If the CRS is unknown.
        pyproj.exceptions.ProjError: If the point cannot be projected.
    """
    x, y = _transform(WGS84_GEOGRAPHIC, epsg, lon, lat)
    return ProjectedPosition(x=x, y=y, z=h, epsg=epsg)


def projected_to_position(x: float, y: float, z: float, epsg: str) -> Position:
    """Inverse of position_to_projected; height passes through."""
    lon, lat = _transform(epsg, WGS84_GEOGRAPHIC, x, y)
    return Position(lat=lat, lon=lon, h=z)


def pose_to_projected(pose: GeoPose, epsg: str) -> ProjectedPose:
    """Transform a GeoPose into a projected 6-DOF pose.

    The quaternion is copied unmodified (ENU-aligned approximation).
    """
    projected = position_to_projected(pose.position.lat, pose.position.lon, pose.position.h, epsg)
    return ProjectedPose(
        x=projected.x,
        y=projected.y,
        z=projected.z,
        quaternion=pose.quaternion,
        epsg=epsg,
    )


def projected_to_pose(pose: ProjectedPose) -> GeoPose:
    """Transform a projected 6-DOF pose back to a GeoPose."""
    position = projected_to_position(pose.x, pose.y, pose.z, pose.epsg)
    return GeoPose(position=position, quaternion=pose.quaternion)


def transform_projected_pose(pose: ProjectedPose, target_epsg: str) -> ProjectedPose:
    """Re-project a ProjectedPose into another CRS via WGS84."""
    lon, lat = _transform(pose.epsg, WGS84_GEOGRAPHIC, pose.x, pose.y)
    x, y = _transform(WGS84_GEOGRAPHIC, target_epsg, lon, lat)
    return ProjectedPose(x=x, y=y, z=pose.z, quaternion=pose.quaternion, epsg=target_epsg)


def utm_zone_for(lon: float, is_north: bool) -> str:
    """EPSG identifier of the WGS84 UTM zone containing ``lon``.

    Args:
        lon: Longitude in degrees.
        is_north: True for the northern hemisphere (326xx), False for
            the southern hemisphere (327xx).

    Example:
        >>> utm_zone_for(10.7522, True)
        'EPSG:32632'
        >>> utm_zone_for(151.2093, False)
        'EPSG:32756'
    """
    zone = math.floor((lon + 180.0) / 6.0) + 1
    base = UTM_NORTH_BASE if is_north else UTM_SOUTH_BASE
    return f"EPSG:{base + zone}"


def utm_zone_for_pose(pose: GeoPose) -> str:
    """UTM zone identifier for a GeoPose; latitude >= 0 counts as north."""
    return utm_zone_for(pose.position.lon, pose.position.lat >= 0.0)
