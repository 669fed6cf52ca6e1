"""Closest points between collision geometry primitives.

Spheres and capsules are both handled as swept spheres (a segment plus a
radius, a sphere being a degenerate segment). Every function returns the
signed distance together with the witness points and the direction that
moves the first geometry away from the second.

Example
-------
>>> import numpy as np
>>> from constrained_ik.collision import Sphere, closest_points
>>> s1 = Sphere(center=np.array([0.0, 0.0, 0.0]), radius=0.5)
>>> s2 = Sphere(center=np.array([2.0, 0.0, 0.0]), radius=0.5)
>>> dist, p1, p2, direction = closest_points(s1, s2)
>>> float(dist)
1.0
"""

import numpy as np

from constrained_ik.collision.geometry import Capsule
from constrained_ik.collision.geometry import HalfSpace
from constrained_ik.collision.geometry import Sphere


_EPS = 1e-12
_FALLBACK_DIRECTION = np.array([0.0, 0.0, 1.0])


def segment_segment_closest_points(p1, q1, p2, q2):
    """Closest points between segments [p1, q1] and [p2, q2].

    Parameters
    ----------
    p1, q1 : numpy.ndarray
        endpoints of the first segment.
    p2, q2 : numpy.ndarray
        endpoints of the second segment.

    Returns
    -------
    c1 : numpy.ndarray
        closest point on the first segment.
    c2 : numpy.ndarray
        closest point on the second segment.
    """
    d1 = q1 - p1  # Direction of segment 1
    d2 = q2 - p2  # Direction of segment 2
    r = p1 - p2
    a = np.dot(d1, d1)
    e = np.dot(d2, d2)
    f = np.dot(d2, r)

    if a <= _EPS and e <= _EPS:
        return p1, p2
    if a <= _EPS:
        s = 0.0
        t = np.clip(f / e, 0.0, 1.0)
    else:
        c = np.dot(d1, r)
        if e <= _EPS:
            t = 0.0
            s = np.clip(-c / a, 0.0, 1.0)
        else:
            b = np.dot(d1, d2)
            denom = a * e - b * b
            if denom > _EPS:
                s = np.clip((b * f - c * e) / denom, 0.0, 1.0)
            else:
                # parallel segments
                s = 0.0
            t = (b * s + f) / e
            if t < 0.0:
                t = 0.0
                s = np.clip(-c / a, 0.0, 1.0)
            elif t > 1.0:
                t = 1.0
                s = np.clip((b - c) / a, 0.0, 1.0)
    return p1 + s * d1, p2 + t * d2


def _swept_sphere(geometry):
    if isinstance(geometry, Sphere):
        return geometry.center, geometry.center, geometry.radius
    if isinstance(geometry, Capsule):
        return geometry.p1, geometry.p2, geometry.radius
    raise TypeError(
        'geometry {} is not a swept sphere'.format(type(geometry).__name__))


def swept_sphere_closest_points(geom_a, geom_b):
    """Closest points between two spheres or capsules.

    Parameters
    ----------
    geom_a : Sphere or Capsule
        First geometry.
    geom_b : Sphere or Capsule
        Second geometry.

    Returns
    -------
    distance : float
        Signed distance. Positive = separated, negative = penetrating.
    point_a : numpy.ndarray
        point on the surface of `geom_a` closest to `geom_b`.
    point_b : numpy.ndarray
        point on the surface of `geom_b` closest to `geom_a`.
    direction : numpy.ndarray
        unit vector from `geom_b` towards `geom_a`.
    """
    p1, q1, r1 = _swept_sphere(geom_a)
    p2, q2, r2 = _swept_sphere(geom_b)
    c1, c2 = segment_segment_closest_points(p1, q1, p2, q2)
    diff = c1 - c2
    norm = np.linalg.norm(diff)
    if norm < _EPS:
        # core segments intersect, no preferred direction
        direction = _FALLBACK_DIRECTION.copy()
    else:
        direction = diff / norm
    distance = norm - r1 - r2
    return distance, c1 - r1 * direction, c2 + r2 * direction, direction


def swept_sphere_halfspace_closest_points(geom, halfspace):
    """Closest points between a sphere or capsule and a half-space.

    Returns
    -------
    distance : float
        Signed distance. Positive = separated, negative = penetrating.
    point_a : numpy.ndarray
        point on `geom` closest to the plane.
    point_b : numpy.ndarray
        projection of that point onto the plane.
    direction : numpy.ndarray
        outward normal of the half-space.
    """
    p, q, radius = _swept_sphere(geom)
    n = halfspace.normal
    sd_p = np.dot(n, p - halfspace.point)
    sd_q = np.dot(n, q - halfspace.point)
    if sd_p <= sd_q:
        center, sd = p, sd_p
    else:
        center, sd = q, sd_q
    point_a = center - radius * n
    point_b = center - sd * n
    return sd - radius, point_a, point_b, n.copy()


def closest_points(geom_a, geom_b):
    """Compute closest points with automatic dispatch on geometry types.

    Parameters
    ----------
    geom_a : CollisionGeometry
        geometry to be pushed away.
    geom_b : CollisionGeometry
        the other geometry.

    Returns
    -------
    distance : float
        Signed distance. Positive = separated, negative = penetrating.
    point_a : numpy.ndarray
        closest point on `geom_a`.
    point_b : numpy.ndarray
        closest point on `geom_b`.
    direction : numpy.ndarray
        unit vector pointing from `geom_b` to `geom_a`.
    """
    a_is_plane = isinstance(geom_a, HalfSpace)
    b_is_plane = isinstance(geom_b, HalfSpace)
    if a_is_plane and b_is_plane:
        raise NotImplementedError(
            'distance between two half-spaces is not supported')
    if b_is_plane:
        return swept_sphere_halfspace_closest_points(geom_a, geom_b)
    if a_is_plane:
        distance, point_b, point_a, direction = \
            swept_sphere_halfspace_closest_points(geom_b, geom_a)
        return distance, point_a, point_b, -direction
    return swept_sphere_closest_points(geom_a, geom_b)


def collision_distance(geom_a, geom_b):
    """Signed distance between two geometries."""
    return closest_points(geom_a, geom_b)[0]
