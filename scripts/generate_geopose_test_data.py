"""
Generate GeoPose Transforms Reference Test Data.

This script evaluates the conversion engine on a fixed set of reference
cases and writes the results to a JSON document. Other GeoPose
implementations load the document and check that they reproduce the same
numbers.

Sections written:
    - conversions.ypr: yaw/pitch/roll -> quaternion
    - conversions.ecef: geodetic position -> ECEF
    - local: small ENU displacements from an origin
    - projected: WGS84 -> planar CRS (only with --projected)
"""

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from geopose import (
    GeoPose,
    GeoPoseYPR,
    Position,
    Quaternion,
    YPRAngles,
    ecef_to_geodetic,
    geodetic_to_ecef,
    local_enu_to_pose,
    pose_to_local_enu,
    position_to_projected,
    utm_zone_for,
    ypr_to_quaternion,
)
from geopose.utils import create_logger

# ============================================================================
# Presets
# ============================================================================

REFERENCE_YPR = [
    {"yaw": 0.0, "pitch": 0.0, "roll": 0.0},
    {"yaw": 90.0, "pitch": 0.0, "roll": 0.0},
    {"yaw": 0.0, "pitch": 90.0, "roll": 0.0},  # gimbal lock
    {"yaw": 0.0, "pitch": 0.0, "roll": 90.0},
    {"yaw": 45.0, "pitch": 45.0, "roll": 45.0},
]

REFERENCE_ECEF = [
    {"lat": 0.0, "lon": 0.0, "h": 0.0},  # Equator / prime meridian
    {"lat": 0.0, "lon": 90.0, "h": 0.0},  # Equator / 90E
    {"lat": 90.0, "lon": 0.0, "h": 0.0},  # North pole
    {"lat": 45.0, "lon": 45.0, "h": 1000.0},
    {"lat": -33.8688, "lon": 151.2093, "h": 50.0},  # Sydney
]

REFERENCE_LOCAL = [
    {"origin": {"lat": 0.0, "lon": 0.0, "h": 0.0}, "target": {"lat": 0.0, "lon": 0.00001, "h": 0.0}},
    {"origin": {"lat": 0.0, "lon": 0.0, "h": 0.0}, "target": {"lat": 0.00001, "lon": 0.0, "h": 0.0}},
    {"origin": {"lat": 0.0, "lon": 0.0, "h": 0.0}, "target": {"lat": 0.0, "lon": 0.0, "h": 10.0}},
]

PRESETS = {
    "reference": {
        "description": "Standard cross-implementation reference cases",
        "ypr": REFERENCE_YPR,
        "ecef": REFERENCE_ECEF,
        "local": REFERENCE_LOCAL,
    },
    "extended": {
        "description": "Reference cases plus southern, antimeridian and high-latitude points",
        "ypr": REFERENCE_YPR
        + [
            {"yaw": -135.0, "pitch": 30.0, "roll": -10.0},
            {"yaw": 179.0, "pitch": -60.0, "roll": 170.0},
        ],
        "ecef": REFERENCE_ECEF
        + [
            {"lat": 59.9139, "lon": 10.7522, "h": 100.0},  # Oslo
            {"lat": -90.0, "lon": 0.0, "h": 0.0},  # South pole
            {"lat": 0.0, "lon": 180.0, "h": 0.0},
            {"lat": 78.2232, "lon": 15.6267, "h": 20.0},  # Longyearbyen
        ],
        "local": REFERENCE_LOCAL
        + [
            {
                "origin": {"lat": 59.9139, "lon": 10.7522, "h": 100.0},
                "target": {"lat": 59.9150, "lon": 10.7540, "h": 110.0},
            },
            {
                "origin": {"lat": 0.0, "lon": 179.9999, "h": 0.0},
                "target": {"lat": 0.0, "lon": -179.9999, "h": 0.0},
            },
        ],
    },
}

PROJECTED_CASES = [
    {"lat": 59.9139, "lon": 10.7522, "h": 100.0},  # Oslo
    {"lat": -33.8688, "lon": 151.2093, "h": 50.0},  # Sydney
    {"lat": 40.7128, "lon": -74.0060, "h": 10.0},  # New York
]


# ============================================================================
# Case generation
# ============================================================================


def generate_ypr_cases(cases: List[Dict]) -> List[Dict]:
    """Yaw/pitch/roll (degrees) -> expected quaternion."""
    results = []
    for angles in cases:
        pose = GeoPoseYPR(Position(0.0, 0.0, 0.0), YPRAngles(**angles))
        results.append(
            {
                "input": angles,
                "expectedQuaternion": ypr_to_quaternion(pose).quaternion.to_dict(),
            }
        )
    return results


def generate_ecef_cases(cases: List[Dict]) -> List[Dict]:
    """Geodetic position -> expected ECEF, with round-trip error."""
    results = []
    for position in cases:
        ecef = geodetic_to_ecef(GeoPose(Position(**position), Quaternion.IDENTITY))
        back = ecef_to_geodetic(ecef.position, ecef.orientation)
        results.append(
            {
                "input": position,
                "expectedECEF": ecef.position.to_dict(),
                "roundTripError": {
                    "lat_deg": abs(back.position.lat - position["lat"]),
                    "h_m": abs(back.position.h - position["h"]),
                },
            }
        )
    return results


def generate_local_cases(cases: List[Dict]) -> List[Dict]:
    """Origin/target pairs -> expected ENU offset of the target."""
    results = []
    for case in cases:
        origin = Position(**case["origin"])
        target = GeoPose(Position(**case["target"]), Quaternion.IDENTITY)

        local = pose_to_local_enu(target, origin)
        back = local_enu_to_pose(local.position, local.orientation, origin)

        results.append(
            {
                "origin": case["origin"],
                "target": case["target"],
                "expectedENU": local.position.to_dict(),
                "roundTripError": {
                    "lat_deg": abs(back.position.lat - target.position.lat),
                    "lon_deg": abs(back.position.lon - target.position.lon),
                },
            }
        )
    return results


def generate_projected_cases(cases: List[Dict]) -> List[Dict]:
    """Geodetic position -> UTM easting/northing in the containing zone."""
    results = []
    for position in cases:
        epsg = utm_zone_for(position["lon"], position["lat"] >= 0.0)
        projected = position_to_projected(position["lat"], position["lon"], position["h"], epsg)
        results.append(
            {
                "input": position,
                "epsg": epsg,
                "expectedProjected": {"x": projected.x, "y": projected.y, "z": projected.z},
            }
        )
    return results


def generate_test_data(preset: str, include_projected: bool = False) -> Dict:
    """
    Build the reference test-data document.

    Args:
        preset: Name of an entry in PRESETS.
        include_projected: Also emit projected (UTM) cases; needs pyproj.

    Returns:
        JSON-serializable dictionary.
    """
    config = PRESETS[preset]

    data = {
        "info": "Standardized Test Data for GeoPose-Transforms Libraries",
        "preset": preset,
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "conversions": {
            "ypr": generate_ypr_cases(config["ypr"]),
            "ecef": generate_ecef_cases(config["ecef"]),
        },
        "local": generate_local_cases(config["local"]),
    }

    if include_projected:
        data["projected"] = generate_projected_cases(PROJECTED_CASES)

    return data


def save_test_data(data: Dict, output: Path) -> None:
    """Write the document with 2-space indentation."""
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w") as f:
        json.dump(data, f, indent=2)

    print(f"\n  Saved test data to: {output}")
    print(f"    YPR cases: {len(data['conversions']['ypr'])}")
    print(f"    ECEF cases: {len(data['conversions']['ecef'])}")
    print(f"    Local cases: {len(data['local'])}")
    if "projected" in data:
        print(f"    Projected cases: {len(data['projected'])}")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate GeoPose Transforms reference test data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Reference cases shared with the other implementations
  python %(prog)s

  # Extended cases including UTM projections
  python %(prog)s --preset extended --projected

  # Show library diagnostics (gimbal lock, SLERP fallbacks)
  python %(prog)s --log-level DEBUG

Available presets: """ + ", ".join(PRESETS.keys()),
    )

    parser.add_argument(
        "--preset",
        type=str,
        choices=PRESETS.keys(),
        default="reference",
        help="Case set to evaluate (default: reference)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="test-data/geopose-transforms-test-data.json",
        help="Output JSON file (default: test-data/geopose-transforms-test-data.json)",
    )
    parser.add_argument(
        "--projected",
        action="store_true",
        help="Also generate projected (UTM) cases",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level for the geopose package (default: WARNING)",
    )

    args = parser.parse_args()

    create_logger("geopose", args.log_level)

    print("\n" + "=" * 70)
    print(f"Generating GeoPose Test Data: {args.preset}")
    print(f"  {PRESETS[args.preset]['description']}")
    print("=" * 70)

    data = generate_test_data(args.preset, include_projected=args.projected)
    save_test_data(data, Path(args.output))

    print("\n" + "=" * 70)
    print("Test data generation complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
