"""Value types for GeoPose conversions.

This module defines the immutable data structures passed between the
conversion functions. Every type mirrors one shape of the OGC GeoPose
interchange format or one intermediate frame used while composing poses.

Key types:
    - Position: WGS84 latitude/longitude (degrees) and ellipsoidal height (m)
    - Quaternion: orientation quaternion, scalar-last (x, y, z, w)
    - GeoPose: Basic-Quaternion pose (orientation relative to local ENU)
    - GeoPoseYPR: Basic-YPR pose (yaw/pitch/roll in degrees)
    - ECEF / ENU: Cartesian positions in the global and local frames
    - EcefPose / LocalPose: position + orientation in those frames
    - ProjectedPose: planar pose tagged with a CRS identifier
    - RelativePose: ENU offset + rotation between two poses

Conventions:
    - Numpy arrays produced by ``to_array`` follow the field order of the
      dataclass, so quaternions are [x, y, z, w].
    - Dataclasses do not validate ranges; see geopose.serialization.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Mapping

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Position:
    """Geodetic position on the WGS84 ellipsoid.

    Attributes:
        lat: Latitude in degrees (positive north).
        lon: Longitude in degrees (positive east).
        h: Height above the WGS84 ellipsoid in meters.
    """

    lat: float
    lon: float
    h: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"lat": float(self.lat), "lon": float(self.lon), "h": float(self.h)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Position":
        return cls(lat=float(data["lat"]), lon=float(data["lon"]), h=float(data["h"]))

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.lat, self.lon, self.h], dtype=np.float64)


@dataclass(frozen=True)
class Quaternion:
    """Orientation quaternion in scalar-last order.

    Attributes:
        x: First vector component.
        y: Second vector component.
        z: Third vector component.
        w: Scalar component.

    Example:
        >>> q = Quaternion.from_array(np.array([0.0, 0.0, 0.7071, 0.7071]))
        >>> q.to_array()
        array([0.    , 0.    , 0.7071, 0.7071])
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    IDENTITY: ClassVar["Quaternion"]

    def to_dict(self) -> Dict[str, float]:
        return {
            "x": float(self.x),
            "y": float(self.y),
            "z": float(self.z),
            "w": float(self.w),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Quaternion":
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            z=float(data["z"]),
            w=float(data["w"]),
        )

    def to_array(self) -> NDArray[np.float64]:
        """Return the quaternion as [x, y, z, w]."""
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)

    @classmethod
    def from_array(cls, q: NDArray[np.float64]) -> "Quaternion":
        """Build a quaternion from a 4-element [x, y, z, w] array."""
        if np.shape(q) != (4,):
            raise ValueError(f"Expected 4-element quaternion, got shape {np.shape(q)}")
        return cls(x=float(q[0]), y=float(q[1]), z=float(q[2]), w=float(q[3]))


Quaternion.IDENTITY = Quaternion(0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class YPRAngles:
    """Yaw/pitch/roll angles in degrees.

    Attributes:
        yaw: Heading, 0 = North, 90 = East.
        pitch: Positive when looking up.
        roll: Positive when banking right.
    """

    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "yaw": float(self.yaw),
            "pitch": float(self.pitch),
            "roll": float(self.roll),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "YPRAngles":
        return cls(
            yaw=float(data["yaw"]),
            pitch=float(data["pitch"]),
            roll=float(data["roll"]),
        )


@dataclass(frozen=True)
class GeoPose:
    """OGC GeoPose Basic-Quaternion.

    The quaternion rotates the object frame into the local East-North-Up
    frame at ``position``.
    """

    position: Position
    quaternion: Quaternion = field(default_factory=lambda: Quaternion.IDENTITY)

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "position": self.position.to_dict(),
            "quaternion": self.quaternion.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GeoPose":
        return cls(
            position=Position.from_dict(data["position"]),
            quaternion=Quaternion.from_dict(data["quaternion"]),
        )


@dataclass(frozen=True)
class GeoPoseYPR:
    """OGC GeoPose Basic-YPR."""

    position: Position
    angles: YPRAngles = field(default_factory=YPRAngles)

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "position": self.position.to_dict(),
            "angles": self.angles.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GeoPoseYPR":
        return cls(
            position=Position.from_dict(data["position"]),
            angles=YPRAngles.from_dict(data["angles"]),
        )


@dataclass(frozen=True)
class ECEF:
    """Earth-Centered Earth-Fixed Cartesian position in meters."""

    x: float
    y: float
    z: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": float(self.x), "y": float(self.y), "z": float(self.z)}

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_array(cls, xyz: NDArray[np.float64]) -> "ECEF":
        return cls(x=float(xyz[0]), y=float(xyz[1]), z=float(xyz[2]))


@dataclass(frozen=True)
class ENU:
    """Offset in a local East-North-Up tangent plane, in meters."""

    east: float = 0.0
    north: float = 0.0
    up: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"east": float(self.east), "north": float(self.north), "up": float(self.up)}

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.east, self.north, self.up], dtype=np.float64)

    @classmethod
    def from_array(cls, enu: NDArray[np.float64]) -> "ENU":
        return cls(east=float(enu[0]), north=float(enu[1]), up=float(enu[2]))


@dataclass(frozen=True)
class EcefPose:
    """Pose with orientation expressed relative to the ECEF axes."""

    position: ECEF
    orientation: Quaternion


@dataclass(frozen=True)
class LocalPose:
    """Pose expressed in the ENU frame of some geodetic origin."""

    position: ENU
    orientation: Quaternion


@dataclass(frozen=True)
class ProjectedPosition:
    """Position in a projected CRS.

    Attributes:
        x: Easting in meters.
        y: Northing in meters.
        z: Height in meters (passed through from the ellipsoidal height).
        epsg: CRS identifier, e.g. "EPSG:32632".
    """

    x: float
    y: float
    z: float
    epsg: str


@dataclass(frozen=True)
class ProjectedPose:
    """6-DOF pose in a projected CRS.

    The quaternion keeps the GeoPose convention and is assumed to be
    aligned with the CRS axes (x = East, y = North). This holds near a UTM
    central meridian and degrades with grid convergence.
    """

    x: float
    y: float
    z: float
    quaternion: Quaternion
    epsg: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": float(self.x),
            "y": float(self.y),
            "z": float(self.z),
            "quaternion": self.quaternion.to_dict(),
            "epsg": self.epsg,
        }


@dataclass(frozen=True)
class RelativePose:
    """Translation and rotation from one pose's local frame to another pose."""

    translation: ENU
    rotation: Quaternion


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an interchange record."""

    valid: bool
    errors: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid
