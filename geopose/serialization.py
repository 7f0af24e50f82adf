"""GeoPose JSON serialization, deserialization and validation.

Interchange format (OGC GeoPose 1.0):

    Basic-Quaternion:
        {"position": {"lat": .., "lon": .., "h": ..},
         "quaternion": {"x": .., "y": .., "z": .., "w": ..}}

    Basic-YPR:
        {"position": {"lat": .., "lon": .., "h": ..},
         "angles": {"yaw": .., "pitch": .., "roll": ..}}

Deserialization fails closed: malformed records give None (or are skipped
in arrays) instead of raising. Range checks live in validate_geopose /
validate_geopose_ypr; the conversion functions never validate.
"""

import json
import logging
import math
from typing import Any, List, Mapping, Optional, Sequence, Union

from geopose.coords.quaternions import quat_normalize
from geopose.coords.rotations import ypr_to_quaternion
from geopose.types import GeoPose, GeoPoseYPR, Quaternion, ValidationResult

logger = logging.getLogger(__name__)

# Allowed deviation of |q| from 1 before a quaternion is reported
NORMALIZATION_TOLERANCE = 0.001

POSITION_KEYS = ("lat", "lon", "h")
QUATERNION_KEYS = ("x", "y", "z", "w")
ANGLE_KEYS = ("yaw", "pitch", "roll")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _has_numbers(obj: Any, keys: Sequence[str]) -> bool:
    return isinstance(obj, Mapping) and all(_is_number(obj.get(k)) for k in keys)


def is_geopose_structure(obj: Any) -> bool:
    """True if ``obj`` has the Basic-Quaternion shape with numeric fields."""
    return (
        isinstance(obj, Mapping)
        and _has_numbers(obj.get("position"), POSITION_KEYS)
        and _has_numbers(obj.get("quaternion"), QUATERNION_KEYS)
    )


def is_geopose_ypr_structure(obj: Any) -> bool:
    """True if ``obj`` has the Basic-YPR shape with numeric fields."""
    return (
        isinstance(obj, Mapping)
        and _has_numbers(obj.get("position"), POSITION_KEYS)
        and _has_numbers(obj.get("angles"), ANGLE_KEYS)
    )


# ============================================================================
# Serialization
# ============================================================================


def _dumps(data: Any, pretty: bool) -> str:
    return json.dumps(data, indent=2) if pretty else json.dumps(data)


def serialize_geopose(pose: GeoPose, pretty: bool = False) -> str:
    """Serialize a Basic-Quaternion GeoPose to JSON."""
    return _dumps(pose.to_dict(), pretty)


def serialize_geopose_ypr(pose: GeoPoseYPR, pretty: bool = False) -> str:
    """Serialize a Basic-YPR GeoPose to JSON."""
    return _dumps(pose.to_dict(), pretty)


def serialize_geopose_array(poses: Sequence[GeoPose], pretty: bool = False) -> str:
    """Serialize a list of Basic-Quaternion GeoPoses to a JSON array."""
    return _dumps([pose.to_dict() for pose in poses], pretty)


# ============================================================================
# Deserialization
# ============================================================================


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"non-standard JSON constant {name}")


def _loads(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (TypeError, ValueError) as exc:
        logger.debug("rejecting GeoPose JSON: %s", exc)
        return None


def geopose_from_dict(obj: Any) -> Optional[GeoPose]:
    """Build a GeoPose from a decoded record, or None if malformed."""
    if not is_geopose_structure(obj):
        logger.debug("rejecting record without Basic-Quaternion structure")
        return None
    return GeoPose.from_dict(obj)


def geopose_ypr_from_dict(obj: Any) -> Optional[GeoPoseYPR]:
    """Build a GeoPoseYPR from a decoded record, or None if malformed."""
    if not is_geopose_ypr_structure(obj):
        logger.debug("rejecting record without Basic-YPR structure")
        return None
    return GeoPoseYPR.from_dict(obj)


def pose_from_object(obj: Any) -> Optional[GeoPose]:
    """Build a Basic-Quaternion GeoPose from either interchange shape.

    Basic-YPR records are converted to quaternion form. Returns None when
    the record matches neither shape.
    """
    if is_geopose_structure(obj):
        return GeoPose.from_dict(obj)
    if is_geopose_ypr_structure(obj):
        return ypr_to_quaternion(GeoPoseYPR.from_dict(obj))
    logger.debug("rejecting record matching neither GeoPose shape")
    return None


def deserialize_geopose(text: str) -> Optional[GeoPose]:
    """Parse Basic-Quaternion JSON; None if it is not valid GeoPose JSON."""
    return geopose_from_dict(_loads(text))


def deserialize_geopose_ypr(text: str) -> Optional[GeoPoseYPR]:
    """Parse Basic-YPR JSON; None if it is not valid GeoPose YPR JSON."""
    return geopose_ypr_from_dict(_loads(text))


def deserialize_pose(text: str) -> Optional[GeoPose]:
    """Parse JSON in either interchange shape into a Basic-Quaternion GeoPose."""
    return pose_from_object(_loads(text))


def deserialize_geopose_array(text: str) -> List[GeoPose]:
    """Parse a JSON array of Basic-Quaternion records.

    Malformed entries are skipped; a non-array document gives [].
    """
    parsed = _loads(text)
    if not isinstance(parsed, list):
        return []
    return [GeoPose.from_dict(item) for item in parsed if is_geopose_structure(item)]


def is_valid_geopose_json(text: str) -> bool:
    return is_geopose_structure(_loads(text))


def is_valid_geopose_ypr_json(text: str) -> bool:
    return is_geopose_ypr_structure(_loads(text))


# ============================================================================
# Validation
# ============================================================================


def _as_record(pose: Any) -> Any:
    if isinstance(pose, (GeoPose, GeoPoseYPR)):
        return pose.to_dict()
    return pose


def _validate_position(record: Any, errors: List[str]) -> None:
    position = record.get("position") if isinstance(record, Mapping) else None
    if not isinstance(position, Mapping):
        errors.append("Missing 'position' object")
        return

    lat = position.get("lat")
    if not _is_number(lat):
        errors.append("position.lat must be a number")
    elif lat < -90 or lat > 90:
        errors.append("position.lat must be between -90 and 90 degrees")
    elif not math.isfinite(lat):
        errors.append("position.lat must be a finite number")

    lon = position.get("lon")
    if not _is_number(lon):
        errors.append("position.lon must be a number")
    elif lon < -180 or lon > 180:
        errors.append("position.lon must be between -180 and 180 degrees")
    elif not math.isfinite(lon):
        errors.append("position.lon must be a finite number")

    h = position.get("h")
    if not _is_number(h):
        errors.append("position.h must be a number")
    elif not math.isfinite(h):
        errors.append("position.h must be a finite number")


def _validate_components(block: Mapping, name: str, keys: Sequence[str], errors: List[str]) -> bool:
    ok = True
    for key in keys:
        value = block.get(key)
        if not _is_number(value):
            errors.append(f"{name}.{key} must be a number")
            ok = False
        elif not math.isfinite(value):
            errors.append(f"{name}.{key} must be a finite number")
            ok = False
    return ok


def validate_geopose(pose: Union[GeoPose, Mapping[str, Any]]) -> ValidationResult:
    """Validate a Basic-Quaternion GeoPose with detailed error messages.

    Checks latitude/longitude bounds, finiteness and that the quaternion
    magnitude is within NORMALIZATION_TOLERANCE of one.

    Args:
        pose: GeoPose instance or decoded interchange record.

    Returns:
        ValidationResult with the list of problems found.

    Example:
        >>> result = validate_geopose({"position": {"lat": 95, "lon": 0, "h": 0},
        ...                            "quaternion": {"x": 0, "y": 0, "z": 0, "w": 1}})
        >>> result.errors
        ['position.lat must be between -90 and 90 degrees']
    """
    record = _as_record(pose)
    errors: List[str] = []

    _validate_position(record, errors)

    quaternion = record.get("quaternion") if isinstance(record, Mapping) else None
    if not isinstance(quaternion, Mapping):
        errors.append("Missing 'quaternion' object")
    elif _validate_components(quaternion, "quaternion", QUATERNION_KEYS, errors):
        mag = math.sqrt(sum(quaternion[k] * quaternion[k] for k in QUATERNION_KEYS))
        if abs(mag - 1.0) > NORMALIZATION_TOLERANCE:
            errors.append(
                f"Quaternion is not normalized (magnitude: {mag:.6f}, expected: 1.0)"
            )

    return ValidationResult(valid=not errors, errors=errors)


def validate_geopose_ypr(pose: Union[GeoPoseYPR, Mapping[str, Any]]) -> ValidationResult:
    """Validate a Basic-YPR GeoPose with detailed error messages."""
    record = _as_record(pose)
    errors: List[str] = []

    _validate_position(record, errors)

    angles = record.get("angles") if isinstance(record, Mapping) else None
    if not isinstance(angles, Mapping):
        errors.append("Missing 'angles' object")
    else:
        _validate_components(angles, "angles", ANGLE_KEYS, errors)

    return ValidationResult(valid=not errors, errors=errors)


def is_valid_pose(pose: Union[GeoPose, GeoPoseYPR, Mapping[str, Any]]) -> bool:
    """True if a pose in either shape passes validation."""
    record = _as_record(pose)
    if isinstance(record, Mapping) and "angles" in record and "quaternion" not in record:
        return validate_geopose_ypr(record).valid
    return validate_geopose(record).valid


def normalize_geopose(pose: GeoPose) -> GeoPose:
    """Return ``pose`` with its quaternion scaled to unit length.

    A zero quaternion becomes the identity.
    """
    q = quat_normalize(pose.quaternion.to_array())
    return GeoPose(position=pose.position, quaternion=Quaternion.from_array(q))
