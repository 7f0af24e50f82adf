"""Unit tests for coordinate transformations (LLH, ECEF, ENU).

This module tests the transformation functions between geodetic (LLH),
Earth-Centered Earth-Fixed (ECEF), and local East-North-Up (ENU)
coordinate systems, and the GeoPose-level wrappers that also re-base
the orientation.

Test cases include:
- Round-trip transformations (LLH -> ECEF -> LLH)
- Round-trip transformations (ECEF -> ENU -> ECEF)
- Known reference points (equator, poles, Greenwich)
- Polar axis handling in ECEF -> LLH
- Orientation re-basing between ENU and ECEF axes
"""

import unittest

import numpy as np

from geopose.coords.quaternions import quat_dot
from geopose.coords.rotations import ypr_to_quat
from geopose.coords.transforms import (
    WGS84,
    WGS84_A,
    WGS84_B,
    WGS84_E2,
    ecef_to_enu,
    ecef_to_geodetic,
    ecef_to_llh,
    ecef_to_position,
    enu_to_ecef,
    geodetic_to_ecef,
    llh_to_ecef,
    position_to_ecef,
)
from geopose.types import ECEF, GeoPose, Position, Quaternion


class TestWGS84Constants(unittest.TestCase):
    def test_ellipsoid_parameters(self) -> None:
        self.assertEqual(WGS84["a"], 6378137.0)
        self.assertAlmostEqual(WGS84_B, 6356752.314245, places=6)
        self.assertAlmostEqual(WGS84_E2, 0.00669437999014, places=14)
        self.assertEqual(WGS84["b"], WGS84_B)


class TestLLHtoECEF(unittest.TestCase):
    """Test cases for LLH to ECEF transformation."""

    def test_equator_prime_meridian(self) -> None:
        """Test conversion at equator and prime meridian (0°N, 0°E)."""
        xyz = llh_to_ecef(0.0, 0.0, 0.0)

        expected = np.array([6378137.0, 0.0, 0.0])
        np.testing.assert_allclose(xyz, expected, rtol=1e-9)

    def test_equator_90_east(self) -> None:
        xyz = llh_to_ecef(0.0, np.pi / 2.0, 0.0)

        np.testing.assert_allclose(xyz, [0.0, WGS84_A, 0.0], atol=1e-6)

    def test_north_pole(self) -> None:
        """Test conversion at North Pole (90°N)."""
        xyz = llh_to_ecef(np.pi / 2.0, 0.0, 0.0)

        # At North Pole: z is the semi-minor axis
        expected = np.array([0.0, 0.0, 6356752.314245])
        np.testing.assert_allclose(xyz, expected, atol=1e-6)

    def test_south_pole(self) -> None:
        """Test conversion at South Pole (90°S)."""
        xyz = llh_to_ecef(-np.pi / 2.0, 0.0, 0.0)

        expected = np.array([0.0, 0.0, -6356752.314245])
        np.testing.assert_allclose(xyz, expected, atol=1e-6)

    def test_greenwich_observatory(self) -> None:
        """Test conversion at Greenwich Observatory (51.4769°N, 0°E)."""
        xyz = llh_to_ecef(np.deg2rad(51.4769), 0.0, 0.0)

        self.assertGreater(xyz[0], 3980000.0)
        self.assertLess(xyz[0], 3981000.0)
        self.assertAlmostEqual(xyz[1], 0.0, delta=1.0)
        self.assertGreater(xyz[2], 4966000.0)
        self.assertLess(xyz[2], 4967000.0)

    def test_with_height(self) -> None:
        """Height moves the point along the ellipsoid normal."""
        xyz_0 = llh_to_ecef(0.0, 0.0, 0.0)
        xyz_100 = llh_to_ecef(0.0, 0.0, 100.0)

        np.testing.assert_allclose(xyz_100 - xyz_0, [100.0, 0.0, 0.0], atol=1e-6)


class TestECEFtoLLH(unittest.TestCase):
    """Test cases for ECEF to LLH transformation."""

    def test_equator_prime_meridian(self) -> None:
        llh = ecef_to_llh(6378137.0, 0.0, 0.0)

        np.testing.assert_allclose(llh, [0.0, 0.0, 0.0], atol=1e-6)

    def test_north_pole(self) -> None:
        llh = ecef_to_llh(0.0, 0.0, 6356752.314245)

        np.testing.assert_allclose(llh[:2], [np.pi / 2.0, 0.0], atol=1e-12)
        self.assertAlmostEqual(llh[2], 0.0, delta=1e-6)

    def test_polar_axis_with_height(self) -> None:
        """On the z axis height is |z| - b and latitude follows the sign of z."""
        llh = ecef_to_llh(0.0, 0.0, WGS84_B + 100.0)
        np.testing.assert_allclose(llh, [np.pi / 2.0, 0.0, 100.0], atol=1e-9)

        llh = ecef_to_llh(0.0, 0.0, -(WGS84_B + 250.0))
        np.testing.assert_allclose(llh, [-np.pi / 2.0, 0.0, 250.0], atol=1e-9)

    def test_arbitrary_point(self) -> None:
        """Test conversion at arbitrary point (45°N, 90°E, 100m)."""
        lat = np.deg2rad(45.0)
        lon = np.deg2rad(90.0)
        height = 100.0

        llh_result = ecef_to_llh(*llh_to_ecef(lat, lon, height))

        np.testing.assert_allclose(llh_result[0], lat, rtol=1e-9)
        np.testing.assert_allclose(llh_result[1], lon, rtol=1e-9)
        np.testing.assert_allclose(llh_result[2], height, atol=1e-3)


class TestRoundTripLLHECEF(unittest.TestCase):
    """Test round-trip transformations between LLH and ECEF."""

    def test_round_trip_multiple_points(self) -> None:
        """Test LLH -> ECEF -> LLH for multiple points."""
        test_points = [
            (0.0, 0.0, 0.0),  # Equator, prime meridian
            (np.deg2rad(45.0), np.deg2rad(90.0), 100.0),  # Mid-latitude
            (np.deg2rad(-30.0), np.deg2rad(-120.0), 500.0),  # Southern hemisphere
            (np.deg2rad(-33.8688), np.deg2rad(151.2093), 50.0),  # Sydney
            (np.deg2rad(89.0), np.deg2rad(180.0), 1000.0),  # Near North Pole
            (np.deg2rad(10.0), np.deg2rad(20.0), 35786000.0),  # Geostationary height
        ]

        for lat, lon, height in test_points:
            with self.subTest(lat=lat, lon=lon, height=height):
                llh_result = ecef_to_llh(*llh_to_ecef(lat, lon, height))

                np.testing.assert_allclose(llh_result[0], lat, rtol=1e-9, atol=1e-12)
                np.testing.assert_allclose(llh_result[1], lon, rtol=1e-9, atol=1e-12)
                np.testing.assert_allclose(llh_result[2], height, atol=1e-3)


class TestECEFtoENU(unittest.TestCase):
    """Test cases for ECEF <-> ENU point transformation."""

    def test_reference_point_is_origin(self) -> None:
        lat_ref = np.deg2rad(45.0)
        lon_ref = np.deg2rad(90.0)

        xyz_ref = llh_to_ecef(lat_ref, lon_ref, 0.0)
        enu = ecef_to_enu(*xyz_ref, lat_ref, lon_ref, 0.0)

        np.testing.assert_allclose(enu, [0.0, 0.0, 0.0], atol=1e-6)

    def test_point_above_reference(self) -> None:
        lat_ref = np.deg2rad(45.0)
        lon_ref = np.deg2rad(90.0)

        xyz_target = llh_to_ecef(lat_ref, lon_ref, 100.0)
        enu = ecef_to_enu(*xyz_target, lat_ref, lon_ref, 0.0)

        np.testing.assert_allclose(enu, [0.0, 0.0, 100.0], atol=1e-6)

    def test_point_east_of_reference(self) -> None:
        lat_ref = np.deg2rad(45.0)
        lon_ref = 0.0

        # At 45° latitude, 1° longitude ≈ 78.8 km
        lon_target = np.deg2rad(100.0 / 78800.0)

        enu = ecef_to_enu(*llh_to_ecef(lat_ref, lon_target, 0.0), lat_ref, lon_ref, 0.0)

        self.assertGreater(enu[0], 90.0)
        self.assertLess(enu[0], 110.0)
        self.assertAlmostEqual(enu[1], 0.0, delta=1.0)
        self.assertAlmostEqual(enu[2], 0.0, delta=1.0)

    def test_round_trip(self) -> None:
        lat_ref = np.deg2rad(59.9139)
        lon_ref = np.deg2rad(10.7522)
        height_ref = 100.0

        for enu in ([0.0, 0.0, 0.0], [100.0, -200.0, 50.0], [-5000.0, 3000.0, -20.0]):
            with self.subTest(enu=enu):
                xyz = enu_to_ecef(*enu, lat_ref, lon_ref, height_ref)
                enu_back = ecef_to_enu(*xyz, lat_ref, lon_ref, height_ref)
                np.testing.assert_allclose(enu_back, enu, atol=1e-6)


class TestGeoPoseECEF(unittest.TestCase):
    """Test cases for GeoPose <-> ECEF pose conversion."""

    def test_origin_pose(self) -> None:
        """Identity at (0°, 0°) becomes the ENU->ECEF rotation itself."""
        result = geodetic_to_ecef(GeoPose(Position(0.0, 0.0, 0.0)))

        np.testing.assert_allclose(result.position.to_array(), [WGS84_A, 0.0, 0.0], atol=1e-6)
        np.testing.assert_allclose(result.orientation.to_array(), [0.5, 0.5, 0.5, 0.5], atol=1e-12)

    def test_round_trip(self) -> None:
        cases = [
            (0.0, 0.0, 0.0, (0.0, 0.0, 0.0)),
            (0.0, 90.0, 0.0, (90.0, 0.0, 0.0)),
            (90.0, 0.0, 0.0, (0.0, 0.0, 0.0)),
            (45.0, 45.0, 1000.0, (45.0, 45.0, 45.0)),
            (-33.8688, 151.2093, 50.0, (-120.0, 10.0, 5.0)),
            (59.9139, 10.7522, 100.0, (30.0, -15.0, 0.0)),
        ]
        for lat, lon, h, ypr in cases:
            with self.subTest(lat=lat, lon=lon, h=h):
                q = ypr_to_quat(*ypr)
                pose = GeoPose(Position(lat, lon, h), Quaternion.from_array(q))

                ecef = geodetic_to_ecef(pose)
                back = ecef_to_geodetic(ecef.position, ecef.orientation)

                self.assertAlmostEqual(back.position.lat, lat, places=9)
                self.assertAlmostEqual(back.position.lon, lon, places=9)
                self.assertAlmostEqual(back.position.h, h, delta=1e-3)
                self.assertAlmostEqual(abs(quat_dot(back.quaternion.to_array(), q)), 1.0, places=9)

    def test_ecef_identity_orientation_at_origin(self) -> None:
        """ECEF axes seen from (0°, 0°): ECEF x (up) is the ENU z axis."""
        pose = ecef_to_geodetic(ECEF(WGS84_A, 0.0, 0.0), Quaternion.IDENTITY)

        np.testing.assert_allclose(pose.quaternion.to_array(), [-0.5, -0.5, -0.5, 0.5], atol=1e-12)

    def test_position_helpers(self) -> None:
        position = Position(lat=-33.8688, lon=151.2093, h=50.0)

        back = ecef_to_position(position_to_ecef(position))

        self.assertAlmostEqual(back.lat, position.lat, places=9)
        self.assertAlmostEqual(back.lon, position.lon, places=9)
        self.assertAlmostEqual(back.h, position.h, delta=1e-3)


class TestUnitOrientation(unittest.TestCase):
    """Re-based orientations stay unit length."""

    def test_geodetic_to_ecef_output_is_unit(self) -> None:
        rng = np.random.default_rng(42)
        for _ in range(100):
            lat = rng.uniform(-90.0, 90.0)
            lon = rng.uniform(-180.0, 180.0)
            ypr = (rng.uniform(-180.0, 180.0), rng.uniform(-90.0, 90.0), rng.uniform(-180.0, 180.0))
            pose = GeoPose(Position(lat, lon, rng.uniform(-100.0, 1000.0)), Quaternion.from_array(ypr_to_quat(*ypr)))

            ecef = geodetic_to_ecef(pose)
            back = ecef_to_geodetic(ecef.position, ecef.orientation)

            self.assertAlmostEqual(float(np.linalg.norm(ecef.orientation.to_array())), 1.0, delta=1e-6)
            self.assertAlmostEqual(float(np.linalg.norm(back.quaternion.to_array())), 1.0, delta=1e-6)


if __name__ == "__main__":
    unittest.main()
