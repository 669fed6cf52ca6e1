"""Proximity queries between chain links and obstacles.

Geometry Primitives
-------------------
- Sphere: Spherical collision geometry
- Capsule: Capsule (line segment + radius) collision geometry
- HalfSpace: Infinite half-space (plane)

Distance Functions
------------------
- closest_points: Automatic dispatch based on geometry types
- collision_distance: Signed distance only

Proximity
---------
- ProximityChecker: nearest obstacle per chain link
- AllowedCollisionMatrix: pairs skipped by the query
- DistanceInfo: distance, closest point and avoidance direction
"""

from constrained_ik.collision.distance import closest_points
from constrained_ik.collision.distance import collision_distance
from constrained_ik.collision.distance import segment_segment_closest_points
from constrained_ik.collision.geometry import Capsule
from constrained_ik.collision.geometry import CollisionGeometry
from constrained_ik.collision.geometry import HalfSpace
from constrained_ik.collision.geometry import Sphere
from constrained_ik.collision.proximity import AllowedCollisionMatrix
from constrained_ik.collision.proximity import DistanceInfo
from constrained_ik.collision.proximity import LinkCollisionGeometry
from constrained_ik.collision.proximity import ProximityChecker
from constrained_ik.collision.proximity import transform_distance_info


__all__ = [
    'AllowedCollisionMatrix',
    'Capsule',
    'CollisionGeometry',
    'DistanceInfo',
    'HalfSpace',
    'LinkCollisionGeometry',
    'ProximityChecker',
    'Sphere',
    'closest_points',
    'collision_distance',
    'segment_segment_closest_points',
    'transform_distance_info',
]
