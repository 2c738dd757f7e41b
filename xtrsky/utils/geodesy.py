"""
Coordinate transformations between ECEF and the local ENU frame.
"""

import math

import numpy as np

# WGS84
WGS84_A = 6378137.0
WGS84_E2 = 6.69437999014e-3


def ecef2lla(pos):
    """
    Convert ECEF XYZ (m) to geodetic latitude and longitude (rad), WGS84.

    Uses Bowring's closed form; accurate to well below a metre for
    ground stations.
    """
    x, y, z = float(pos[0]), float(pos[1]), float(pos[2])
    a = WGS84_A
    e2 = WGS84_E2

    b = a * math.sqrt(1 - e2)
    ep = math.sqrt((a**2 - b**2) / b**2)
    p = math.hypot(x, y)

    th = math.atan2(a * z, b * p)
    lon = math.atan2(y, x)
    lat = math.atan2(z + ep * ep * b * math.sin(th) ** 3, p - e2 * a * math.cos(th) ** 3)
    return lat, lon


def rot_ecef2enu(lat: float, lon: float) -> np.ndarray:
    """Rotation matrix from ECEF to ENU at (lat, lon) in radians."""
    sl = math.sin(lat)
    cl = math.cos(lat)
    slon = math.sin(lon)
    clon = math.cos(lon)

    return np.array(
        [
            [-slon, clon, 0.0],
            [-sl * clon, -sl * slon, cl],
            [cl * clon, cl * slon, sl],
        ]
    )


def azel2enu(azimuth, elevation) -> np.ndarray:
    """
    Unit line-of-sight vectors for azimuth/elevation in degrees.

    Returns an array of shape ``azimuth.shape + (3,)`` holding (E, N, U).
    """
    az = np.deg2rad(np.asarray(azimuth, dtype=float))
    el = np.deg2rad(np.asarray(elevation, dtype=float))
    return np.stack([np.sin(az) * np.cos(el), np.cos(az) * np.cos(el), np.sin(el)], axis=-1)


def polar_projection(azimuth, elevation):
    """
    Project directions onto the zenith-centred skyplot plane.

    Radius is the zenith distance (90 - elevation) and the angle is azimuth
    measured clockwise from north, so north is +y and east is +x.
    """
    az = np.deg2rad(np.asarray(azimuth, dtype=float))
    r = 90.0 - np.asarray(elevation, dtype=float)
    return r * np.sin(az), r * np.cos(az)
