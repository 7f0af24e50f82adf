"""Immutable convenience wrapper around a Basic-Quaternion GeoPose.

GeoPoseBasic bundles a position and a unit quaternion and exposes the
conversion functions as methods. Every "mutating" method returns a new
instance, so values can be shared freely between threads.

Example:
    >>> pose = GeoPoseBasic.from_lat_lon_height_ypr(59.9139, 10.7522, 100.0, 45.0, 0.0, 0.0)
    >>> moved = pose.translate_north(10.0).rotate_around_up_axis(15.0)
    >>> round(moved.yaw, 3)
    60.0
    >>> moved.utm_zone()
    'EPSG:32632'
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

import numpy as np

from geopose.algebra import apply_relative_pose, interpolate_pose, relative_pose
from geopose.coords.quaternions import quat_multiply, quat_normalize
from geopose.coords.rotations import quaternion_to_ypr, ypr_to_quaternion
from geopose.coords.transforms import ecef_to_geodetic, geodetic_to_ecef
from geopose.local import local_enu_to_pose, pose_to_local_enu, translate_pose
from geopose.projected import pose_to_projected, projected_to_pose, utm_zone_for_pose
from geopose.serialization import (
    deserialize_geopose,
    deserialize_geopose_ypr,
    pose_from_object,
    serialize_geopose,
    serialize_geopose_ypr,
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
    Quaternion,
    RelativePose,
    YPRAngles,
)

PoseLike = Union["GeoPoseBasic", GeoPose]


def _normalized(q: Quaternion) -> Quaternion:
    return Quaternion.from_array(quat_normalize(q.to_array()))


def _as_geopose(pose: PoseLike) -> GeoPose:
    return pose.to_geopose() if isinstance(pose, GeoPoseBasic) else pose


@dataclass(frozen=True)
class GeoPoseBasic:
    """Basic-Quaternion GeoPose value with fluent accessors.

    Attributes:
        position: WGS84 position (degrees, meters).
        quaternion: Orientation relative to the local ENU frame.

    Quaternions passed to the ``from_*``/``with_*`` builders are
    normalized; the plain constructor stores what it is given.
    """

    position: Position
    quaternion: Quaternion = field(default_factory=lambda: Quaternion.IDENTITY)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_geopose(cls, pose: GeoPose) -> "GeoPoseBasic":
        return cls(position=pose.position, quaternion=pose.quaternion)

    @classmethod
    def from_position(
        cls,
        position: Position,
        quaternion: Optional[Quaternion] = None,
    ) -> "GeoPoseBasic":
        q = _normalized(quaternion) if quaternion is not None else Quaternion.IDENTITY
        return cls(position=position, quaternion=q)

    @classmethod
    def from_lat_lon_height(
        cls,
        lat: float,
        lon: float,
        h: float,
        quaternion: Optional[Quaternion] = None,
    ) -> "GeoPoseBasic":
        return cls.from_position(Position(lat=lat, lon=lon, h=h), quaternion)

    @classmethod
    def from_ypr(cls, position: Position, yaw: float, pitch: float, roll: float) -> "GeoPoseBasic":
        pose = ypr_to_quaternion(GeoPoseYPR(position, YPRAngles(yaw=yaw, pitch=pitch, roll=roll)))
        return cls.from_geopose(pose)

    @classmethod
    def from_lat_lon_height_ypr(
        cls,
        lat: float,
        lon: float,
        h: float,
        yaw: float,
        pitch: float,
        roll: float,
    ) -> "GeoPoseBasic":
        return cls.from_ypr(Position(lat=lat, lon=lon, h=h), yaw, pitch, roll)

    @classmethod
    def from_ecef(cls, position: ECEF, orientation: Quaternion) -> "GeoPoseBasic":
        return cls.from_geopose(ecef_to_geodetic(position, orientation))

    @classmethod
    def from_local_enu(cls, enu: ENU, orientation: Quaternion, origin: Position) -> "GeoPoseBasic":
        return cls.from_geopose(local_enu_to_pose(enu, orientation, origin))

    @classmethod
    def from_relative_pose(cls, base: PoseLike, relative: RelativePose) -> "GeoPoseBasic":
        return cls.from_geopose(apply_relative_pose(_as_geopose(base), relative))

    @classmethod
    def from_projected(cls, pose: ProjectedPose) -> "GeoPoseBasic":
        return cls.from_geopose(projected_to_pose(pose))

    @classmethod
    def from_geopose_json(cls, text: str) -> Optional["GeoPoseBasic"]:
        """Parse Basic-Quaternion JSON; None if malformed."""
        pose = deserialize_geopose(text)
        return cls.from_geopose(pose) if pose is not None else None

    @classmethod
    def from_geopose_ypr_json(cls, text: str) -> Optional["GeoPoseBasic"]:
        """Parse Basic-YPR JSON; None if malformed."""
        pose = deserialize_geopose_ypr(text)
        return cls.from_geopose(ypr_to_quaternion(pose)) if pose is not None else None

    @classmethod
    def from_object(cls, value: Any) -> Optional["GeoPoseBasic"]:
        """Build from a decoded record in either interchange shape."""
        pose = pose_from_object(value)
        return cls.from_geopose(pose) if pose is not None else None

    @classmethod
    def from_json(cls, text: str) -> Optional["GeoPoseBasic"]:
        """Parse JSON in either interchange shape; None if malformed."""
        pose = deserialize_geopose(text)
        if pose is not None:
            return cls.from_geopose(pose)
        return cls.from_geopose_ypr_json(text)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def lat(self) -> float:
        return self.position.lat

    @property
    def lon(self) -> float:
        return self.position.lon

    @property
    def h(self) -> float:
        return self.position.h

    @property
    def qx(self) -> float:
        return self.quaternion.x

    @property
    def qy(self) -> float:
        return self.quaternion.y

    @property
    def qz(self) -> float:
        return self.quaternion.z

    @property
    def qw(self) -> float:
        return self.quaternion.w

    @property
    def angles(self) -> YPRAngles:
        return self.to_geopose_ypr().angles

    @property
    def yaw(self) -> float:
        """Yaw in degrees (0 = North, 90 = East)."""
        return self.angles.yaw

    @property
    def pitch(self) -> float:
        return self.angles.pitch

    @property
    def roll(self) -> float:
        return self.angles.roll

    # Aviation/camera aliases
    heading = yaw
    tilt = pitch
    bank = roll

    @property
    def yaw_rad(self) -> float:
        return float(np.deg2rad(self.yaw))

    @property
    def pitch_rad(self) -> float:
        return float(np.deg2rad(self.pitch))

    @property
    def roll_rad(self) -> float:
        return float(np.deg2rad(self.roll))

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def to_geopose(self) -> GeoPose:
        return GeoPose(position=self.position, quaternion=self.quaternion)

    def to_geopose_ypr(self) -> GeoPoseYPR:
        return quaternion_to_ypr(self.to_geopose())

    def to_json(self, pretty: bool = False) -> str:
        return serialize_geopose(self.to_geopose(), pretty)

    def to_ypr_json(self, pretty: bool = False) -> str:
        return serialize_geopose_ypr(self.to_geopose_ypr(), pretty)

    def to_ecef(self) -> EcefPose:
        return geodetic_to_ecef(self.to_geopose())

    def to_local_enu(self, origin: Position) -> LocalPose:
        return pose_to_local_enu(self.to_geopose(), origin)

    def to_projected(self, epsg: str) -> ProjectedPose:
        return pose_to_projected(self.to_geopose(), epsg)

    def to_projected_utm(self) -> ProjectedPose:
        """Project into the UTM zone containing this pose."""
        return self.to_projected(self.utm_zone())

    def utm_zone(self) -> str:
        return utm_zone_for_pose(self.to_geopose())

    def relative_pose_to(self, target: PoseLike) -> RelativePose:
        return relative_pose(self.to_geopose(), _as_geopose(target))

    def interpolate_to(self, target: PoseLike, t: float) -> "GeoPoseBasic":
        return GeoPoseBasic.from_geopose(interpolate_pose(self.to_geopose(), _as_geopose(target), t))

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def with_position(self, position: Position) -> "GeoPoseBasic":
        return GeoPoseBasic(position=position, quaternion=self.quaternion)

    def with_lat_lon_height(self, lat: float, lon: float, h: float) -> "GeoPoseBasic":
        return self.with_position(Position(lat=lat, lon=lon, h=h))

    def with_quaternion(self, quaternion: Quaternion) -> "GeoPoseBasic":
        return GeoPoseBasic(position=self.position, quaternion=_normalized(quaternion))

    def with_ypr(self, yaw: float, pitch: float, roll: float) -> "GeoPoseBasic":
        return GeoPoseBasic.from_ypr(self.position, yaw, pitch, roll)

    def with_yaw(self, yaw: float) -> "GeoPoseBasic":
        angles = self.angles
        return self.with_ypr(yaw, angles.pitch, angles.roll)

    def with_pitch(self, pitch: float) -> "GeoPoseBasic":
        angles = self.angles
        return self.with_ypr(angles.yaw, pitch, angles.roll)

    def with_roll(self, roll: float) -> "GeoPoseBasic":
        angles = self.angles
        return self.with_ypr(angles.yaw, angles.pitch, roll)

    def normalized(self) -> "GeoPoseBasic":
        return self.with_quaternion(self.quaternion)

    def translate_enu(self, enu: ENU) -> "GeoPoseBasic":
        return GeoPoseBasic.from_geopose(translate_pose(self.to_geopose(), enu))

    def translate_by(self, east: float, north: float, up: float) -> "GeoPoseBasic":
        return self.translate_enu(ENU(east=east, north=north, up=up))

    def translate_north(self, meters: float) -> "GeoPoseBasic":
        return self.translate_by(0.0, meters, 0.0)

    def translate_east(self, meters: float) -> "GeoPoseBasic":
        return self.translate_by(meters, 0.0, 0.0)

    def translate_up(self, meters: float) -> "GeoPoseBasic":
        return self.translate_by(0.0, 0.0, meters)

    def _rotate_by_ypr_delta(self, yaw: float, pitch: float, roll: float) -> "GeoPoseBasic":
        angles = self.angles
        return self.with_ypr(angles.yaw + yaw, angles.pitch + pitch, angles.roll + roll)

    def rotate_around_up_axis(self, degrees: float) -> "GeoPoseBasic":
        return self._rotate_by_ypr_delta(degrees, 0.0, 0.0)

    def rotate_around_north_axis(self, degrees: float) -> "GeoPoseBasic":
        return self._rotate_by_ypr_delta(0.0, degrees, 0.0)

    def rotate_around_east_axis(self, degrees: float) -> "GeoPoseBasic":
        return self._rotate_by_ypr_delta(0.0, 0.0, degrees)

    def rotate_by_quaternion(self, rotation: Quaternion) -> "GeoPoseBasic":
        """Pre-multiply the orientation by ``rotation`` (expressed in ENU)."""
        q = quat_multiply(rotation.to_array(), self.quaternion.to_array())
        return GeoPoseBasic(position=self.position, quaternion=Quaternion.from_array(quat_normalize(q)))

    def apply_relative_pose(self, relative: RelativePose) -> "GeoPoseBasic":
        return GeoPoseBasic.from_geopose(apply_relative_pose(self.to_geopose(), relative))
