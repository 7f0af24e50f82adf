"""Unit tests for rotation representations and frame rotations.

Test cases include:
- Known yaw/pitch/roll quaternions and round trips
- Gimbal lock clamping
- Shepperd extraction for every branch (including 180° rotations)
- ENU <-> ECEF rotation consistency between matrix and quaternion forms
- Agreement with scipy.spatial.transform.Rotation (Z-Y-X intrinsic)
"""

import unittest

import numpy as np
from scipy.spatial.transform import Rotation

from geopose.coords.quaternions import quat_conjugate, quat_dot
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
from geopose.types import GeoPose, GeoPoseYPR, Position, Quaternion, YPRAngles

S45 = np.sin(np.pi / 4.0)


class TestYPRToQuat(unittest.TestCase):
    """Test cases for yaw/pitch/roll to quaternion conversion."""

    def test_zero_angles_give_identity(self) -> None:
        np.testing.assert_allclose(ypr_to_quat(0.0, 0.0, 0.0), [0.0, 0.0, 0.0, 1.0], atol=1e-15)

    def test_single_axis_rotations(self) -> None:
        """90° about each axis puts sin(45°) in the matching component."""
        cases = [
            ((90.0, 0.0, 0.0), [0.0, 0.0, S45, S45]),
            ((0.0, 90.0, 0.0), [0.0, S45, 0.0, S45]),
            ((0.0, 0.0, 90.0), [S45, 0.0, 0.0, S45]),
        ]
        for ypr, expected in cases:
            with self.subTest(ypr=ypr):
                np.testing.assert_allclose(ypr_to_quat(*ypr), expected, atol=1e-12)

    def test_result_is_unit(self) -> None:
        q = ypr_to_quat(45.0, 45.0, 45.0)
        self.assertAlmostEqual(float(np.linalg.norm(q)), 1.0, places=12)

    def test_geopose_wrapper_keeps_position(self) -> None:
        position = Position(lat=12.0, lon=34.0, h=56.0)
        pose = ypr_to_quaternion(GeoPoseYPR(position, YPRAngles(yaw=90.0)))

        self.assertEqual(pose.position, position)
        self.assertAlmostEqual(pose.quaternion.z, S45, places=12)
        self.assertAlmostEqual(pose.quaternion.w, S45, places=12)


class TestQuatToYPR(unittest.TestCase):
    """Test cases for quaternion to yaw/pitch/roll conversion."""

    def test_round_trip(self) -> None:
        cases = [
            (0.0, 0.0, 0.0),
            (90.0, 0.0, 0.0),
            (0.0, 0.0, 90.0),
            (45.0, 45.0, 45.0),
            (-120.0, 30.0, -15.0),
            (179.0, -60.0, 170.0),
        ]
        for yaw, pitch, roll in cases:
            with self.subTest(yaw=yaw, pitch=pitch, roll=roll):
                result = quat_to_ypr(ypr_to_quat(yaw, pitch, roll))
                np.testing.assert_allclose(result, [yaw, pitch, roll], atol=1e-5)

    def test_gimbal_lock_clamps_pitch(self) -> None:
        """Slightly over-unit input still yields exactly ±90° pitch."""
        _, pitch, _ = quat_to_ypr(np.array([0.0, 0.7072, 0.0, 0.7072]))
        self.assertAlmostEqual(pitch, 90.0, places=12)

        _, pitch, _ = quat_to_ypr(np.array([0.0, -0.7072, 0.0, 0.7072]))
        self.assertAlmostEqual(pitch, -90.0, places=12)

    def test_pitch_90_from_angles(self) -> None:
        _, pitch, _ = quat_to_ypr(ypr_to_quat(0.0, 90.0, 0.0))
        self.assertAlmostEqual(pitch, 90.0, delta=1e-5)

    def test_geopose_wrapper(self) -> None:
        pose = GeoPose(Position(1.0, 2.0, 3.0), Quaternion(0.0, 0.0, S45, S45))

        result = quaternion_to_ypr(pose)

        self.assertEqual(result.position, pose.position)
        self.assertAlmostEqual(result.angles.yaw, 90.0, places=9)
        self.assertAlmostEqual(result.angles.pitch, 0.0, places=9)
        self.assertAlmostEqual(result.angles.roll, 0.0, places=9)

    def test_wrong_shape_raises(self) -> None:
        with self.assertRaises(ValueError):
            quat_to_ypr(np.array([0.0, 0.0, 1.0]))


class TestRotationMatrixToQuat(unittest.TestCase):
    """Test cases for Shepperd's method."""

    def test_identity_matrix(self) -> None:
        np.testing.assert_allclose(rotation_matrix_to_quat(np.eye(3)), [0.0, 0.0, 0.0, 1.0], atol=1e-15)

    def test_half_turns(self) -> None:
        """180° rotations have zero trace contribution and use the diagonal branches."""
        cases = [
            (np.diag([1.0, -1.0, -1.0]), [1.0, 0.0, 0.0, 0.0]),
            (np.diag([-1.0, 1.0, -1.0]), [0.0, 1.0, 0.0, 0.0]),
            (np.diag([-1.0, -1.0, 1.0]), [0.0, 0.0, 1.0, 0.0]),
        ]
        for R, expected in cases:
            with self.subTest(expected=expected):
                np.testing.assert_allclose(rotation_matrix_to_quat(R), expected, atol=1e-15)

    def test_matrix_round_trip(self) -> None:
        for ypr in [(10.0, 20.0, 30.0), (170.0, -10.0, 175.0), (-90.0, 80.0, 0.0), (180.0, 0.0, 0.0)]:
            with self.subTest(ypr=ypr):
                q = ypr_to_quat(*ypr)
                q_back = rotation_matrix_to_quat(quat_to_rotation_matrix(q))
                self.assertAlmostEqual(abs(quat_dot(q, q_back)), 1.0, places=12)

    def test_matrix_is_orthonormal(self) -> None:
        R = quat_to_rotation_matrix(ypr_to_quat(30.0, -20.0, 10.0))

        np.testing.assert_allclose(R.T @ R, np.eye(3), atol=1e-12)
        self.assertAlmostEqual(np.linalg.det(R), 1.0, places=12)

    def test_wrong_shape_raises(self) -> None:
        with self.assertRaises(ValueError):
            rotation_matrix_to_quat(np.eye(4))


class TestFrameRotations(unittest.TestCase):
    """Test cases for the ENU <-> ECEF rotation."""

    def test_matrix_at_origin(self) -> None:
        """At (0°, 0°): East = +Y, North = +Z, Up = +X."""
        R = enu_to_ecef_matrix(0.0, 0.0)

        expected = np.array(
            [
                [0.0, 0.0, 1.0],
                [1.0, 0.0, 0.0],
                [0.0, 1.0, 0.0],
            ]
        )
        np.testing.assert_allclose(R, expected, atol=1e-15)

    def test_quaternion_at_origin(self) -> None:
        np.testing.assert_allclose(enu_to_ecef_quat(0.0, 0.0), [0.5, 0.5, 0.5, 0.5], atol=1e-15)

    def test_quaternion_matches_matrix(self) -> None:
        """The extracted quaternion rebuilds the same rotation over a lat/lon grid."""
        for lat_deg in (-90.0, -60.0, -1.0, 0.0, 33.0, 89.9, 90.0):
            for lon_deg in (-180.0, -135.0, -45.0, 0.0, 10.0, 90.0, 179.0):
                with self.subTest(lat=lat_deg, lon=lon_deg):
                    lat = np.deg2rad(lat_deg)
                    lon = np.deg2rad(lon_deg)
                    R = quat_to_rotation_matrix(enu_to_ecef_quat(lat, lon))
                    np.testing.assert_allclose(R, enu_to_ecef_matrix(lat, lon), atol=1e-12)

    def test_ecef_to_enu_is_conjugate(self) -> None:
        lat = np.deg2rad(59.9139)
        lon = np.deg2rad(10.7522)

        np.testing.assert_array_equal(
            ecef_to_enu_quat(lat, lon),
            quat_conjugate(enu_to_ecef_quat(lat, lon)),
        )
        np.testing.assert_allclose(
            quat_to_rotation_matrix(ecef_to_enu_quat(lat, lon)),
            ecef_to_enu_matrix(lat, lon),
            atol=1e-12,
        )

    def test_up_vector(self) -> None:
        """ENU up maps to the geodetic normal."""
        lat = np.deg2rad(45.0)
        lon = np.deg2rad(90.0)

        up_ecef = rotate_vector(enu_to_ecef_quat(lat, lon), np.array([0.0, 0.0, 1.0]))

        expected = np.array([0.0, np.cos(lat), np.sin(lat)])
        np.testing.assert_allclose(up_ecef, expected, atol=1e-12)


class TestRotateVector(unittest.TestCase):
    def test_yaw_90_rotates_x_to_y(self) -> None:
        v = rotate_vector(ypr_to_quat(90.0, 0.0, 0.0), np.array([1.0, 0.0, 0.0]))
        np.testing.assert_allclose(v, [0.0, 1.0, 0.0], atol=1e-12)

    def test_wrong_shape_raises(self) -> None:
        with self.assertRaises(ValueError):
            rotate_vector(ypr_to_quat(0.0, 0.0, 0.0), np.zeros(4))


class TestAgainstScipy(unittest.TestCase):
    """Cross-check against scipy, which also uses scalar-last quaternions."""

    CASES = [(10.0, 20.0, 30.0), (-135.0, 45.0, -60.0), (179.0, -80.0, 5.0), (0.0, 0.0, -170.0)]

    def test_ypr_to_quat(self) -> None:
        for yaw, pitch, roll in self.CASES:
            with self.subTest(yaw=yaw, pitch=pitch, roll=roll):
                expected = Rotation.from_euler("ZYX", [yaw, pitch, roll], degrees=True).as_quat()
                q = ypr_to_quat(yaw, pitch, roll)
                self.assertAlmostEqual(abs(quat_dot(q, expected)), 1.0, places=12)

    def test_rotation_matrix(self) -> None:
        for ypr in self.CASES:
            with self.subTest(ypr=ypr):
                q = ypr_to_quat(*ypr)
                expected = Rotation.from_quat(q).as_matrix()
                np.testing.assert_allclose(quat_to_rotation_matrix(q), expected, atol=1e-12)

    def test_matrix_to_quat(self) -> None:
        for ypr in self.CASES:
            with self.subTest(ypr=ypr):
                R = Rotation.from_euler("ZYX", ypr, degrees=True).as_matrix()
                expected = Rotation.from_matrix(R).as_quat()
                self.assertAlmostEqual(abs(quat_dot(rotation_matrix_to_quat(R), expected)), 1.0, places=12)


if __name__ == "__main__":
    unittest.main()
