"""Example: converting and composing GeoPoses.

This example walks through the conversion engine:
1. Yaw/pitch/roll <-> quaternion
2. GeoPose <-> ECEF
3. Poses relative to a local ENU origin
4. Relative poses and interpolation
5. UTM projection
6. JSON interchange and validation
"""

import argparse
import sys
from pathlib import Path
from typing import List

import matplotlib.pyplot as plt
import numpy as np

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from geopose import (
    GeoPose,
    GeoPoseBasic,
    GeoPoseYPR,
    Position,
    YPRAngles,
    apply_relative_pose,
    ecef_to_geodetic,
    geodetic_to_ecef,
    interpolate_pose,
    local_enu_to_pose,
    pose_to_local_enu,
    pose_to_projected,
    quaternion_to_ypr,
    relative_pose,
    serialize_geopose,
    utm_zone_for_pose,
    validate_geopose,
    ypr_to_quaternion,
)
from geopose.utils import create_logger


def _print_pose(label: str, pose: GeoPose) -> None:
    q = pose.quaternion
    print(f"{label}")
    print(f"  Position:   lat={pose.position.lat:.7f}°, lon={pose.position.lon:.7f}°, h={pose.position.h:.3f} m")
    print(f"  Quaternion: [{q.x:+.6f}, {q.y:+.6f}, {q.z:+.6f}, {q.w:+.6f}]")


def plot_interpolation(start: GeoPose, path: List[GeoPose], figs_dir: Path) -> Path:
    """Plot interpolated poses in the ENU frame of the start pose."""
    figs_dir.mkdir(parents=True, exist_ok=True)

    local = [pose_to_local_enu(p, start.position) for p in path]
    east = np.array([lp.position.east for lp in local])
    north = np.array([lp.position.north for lp in local])
    yaw = np.deg2rad([quaternion_to_ypr(p).angles.yaw for p in path])

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.plot(east, north, "o-", color="tab:blue", label="Interpolated position")
    # Yaw 0 = North, 90 = East
    ax.quiver(east, north, np.sin(yaw), np.cos(yaw), color="tab:red", width=0.004, label="Heading")
    ax.set_xlabel("East [m]")
    ax.set_ylabel("North [m]")
    ax.set_title("GeoPose interpolation (ECEF lerp + SLERP)")
    ax.axis("equal")
    ax.grid(True, alpha=0.3)
    ax.legend()
    plt.tight_layout()

    output_file = figs_dir / "geopose_interpolation.svg"
    fig.savefig(output_file, dpi=300, bbox_inches="tight")
    plt.close(fig)
    return output_file


def main(plot: bool = False) -> None:
    """Run GeoPose conversion examples."""
    create_logger("geopose", "INFO")

    print("=" * 70)
    print("GeoPose Conversion Examples")
    print("=" * 70)

    # Example 1: YPR to quaternion
    print("\n1. Yaw/Pitch/Roll <-> Quaternion")
    print("-" * 70)

    # Camera at the Oslo Opera House looking north-east, tilted up
    oslo = Position(lat=59.9075, lon=10.7531, h=40.0)
    ypr_pose = GeoPoseYPR(oslo, YPRAngles(yaw=45.0, pitch=10.0, roll=0.0))
    pose = ypr_to_quaternion(ypr_pose)

    _print_pose("Basic-Quaternion pose:", pose)

    angles = quaternion_to_ypr(pose).angles
    print(f"Recovered YPR: yaw={angles.yaw:.4f}°, pitch={angles.pitch:.4f}°, roll={angles.roll:.4f}°")

    # Example 2: GeoPose to ECEF
    print("\n2. GeoPose <-> ECEF")
    print("-" * 70)

    ecef = geodetic_to_ecef(pose)
    print("ECEF position:")
    print(f"  X: {ecef.position.x:,.3f} m")
    print(f"  Y: {ecef.position.y:,.3f} m")
    print(f"  Z: {ecef.position.z:,.3f} m")
    o = ecef.orientation
    print(f"ECEF orientation: [{o.x:+.6f}, {o.y:+.6f}, {o.z:+.6f}, {o.w:+.6f}]")

    back = ecef_to_geodetic(ecef.position, ecef.orientation)
    print(f"Round-trip height error: {abs(back.position.h - pose.position.h):.3e} m")

    # Example 3: Local ENU frame
    print("\n3. Local ENU Frame")
    print("-" * 70)

    # Origin: a survey marker near the camera
    origin = Position(lat=59.9070, lon=10.7520, h=35.0)
    local = pose_to_local_enu(pose, origin)
    enu = local.position
    print("Camera relative to survey marker:")
    print(f"  East:  {enu.east:8.3f} m")
    print(f"  North: {enu.north:8.3f} m")
    print(f"  Up:    {enu.up:8.3f} m")

    recovered = local_enu_to_pose(local.position, local.orientation, origin)
    lat_err_m = np.deg2rad(abs(recovered.position.lat - pose.position.lat)) * 6378137.0
    print(f"Round-trip latitude error: {lat_err_m:.3e} m")

    # Example 4: Relative pose and interpolation
    print("\n4. Relative Pose and Interpolation")
    print("-" * 70)

    target = GeoPoseBasic.from_geopose(pose).translate_by(50.0, 120.0, 5.0).rotate_around_up_axis(90.0)
    rel = relative_pose(pose, target.to_geopose())
    t = rel.translation
    print(f"Relative translation: E={t.east:.3f} m, N={t.north:.3f} m, U={t.up:.3f} m")

    applied = apply_relative_pose(pose, rel)
    print(f"Apply relative pose, height error: {abs(applied.position.h - target.h):.3e} m")

    path = [interpolate_pose(pose, target.to_geopose(), frac) for frac in np.linspace(0.0, 1.0, 11)]
    for frac, interpolated in zip(np.linspace(0.0, 1.0, 11)[::2], path[::2]):
        mid = GeoPoseBasic.from_geopose(interpolated)
        print(f"  t={frac:.2f}: lat={mid.lat:.7f}°, lon={mid.lon:.7f}°, yaw={mid.yaw:7.3f}°")

    # Example 5: UTM projection
    print("\n5. UTM Projection")
    print("-" * 70)

    epsg = utm_zone_for_pose(pose)
    projected = pose_to_projected(pose, epsg)
    print(f"Zone: {epsg}")
    print(f"  Easting:  {projected.x:,.3f} m")
    print(f"  Northing: {projected.y:,.3f} m")
    print(f"  Height:   {projected.z:.3f} m")

    # Example 6: JSON interchange
    print("\n6. JSON Interchange")
    print("-" * 70)

    print(serialize_geopose(pose, pretty=True))

    result = validate_geopose({"position": {"lat": 95.0, "lon": 0.0, "h": 0.0},
                               "quaternion": {"x": 0.0, "y": 0.0, "z": 0.0, "w": 2.0}})
    print(f"Invalid record accepted: {result.valid}")
    for error in result.errors:
        print(f"  - {error}")

    if plot:
        output_file = plot_interpolation(pose, path, Path(__file__).parent / "figs")
        print(f"\n  [OK] Saved: {output_file}")

    print("\n" + "=" * 70)
    print("Examples completed successfully!")
    print("=" * 70)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="GeoPose conversion examples")
    parser.add_argument("--plot", action="store_true", help="Save an interpolation figure to examples/figs/")
    args = parser.parse_args()

    main(plot=args.plot)
