from dataclasses import dataclass
from dataclasses import replace
from logging import getLogger

import numpy as np

from constrained_ik.collision.distance import closest_points
from constrained_ik.collision.geometry import Capsule
from constrained_ik.collision.geometry import HalfSpace
from constrained_ik.collision.geometry import Sphere


logger = getLogger(__name__)


@dataclass
class DistanceInfo:
    """Nearest obstacle of one link.

    Parameters
    ----------
    link_name : str
        name of the link.
    nearest_obstacle : str
        name of the nearest robot link or world obstacle.
    distance : float
        signed distance. Negative means penetration.
    link_point : numpy.ndarray
        point on the link closest to the obstacle.
    obstacle_point : numpy.ndarray
        point on the obstacle closest to the link.
    avoidance_vector : numpy.ndarray
        unit vector pointing away from the obstacle.
    """
    link_name: str
    nearest_obstacle: str
    distance: float
    link_point: np.ndarray
    obstacle_point: np.ndarray
    avoidance_vector: np.ndarray

    def transformed(self, transform):
        """Return this info expressed in another frame.

        Points are rotated and translated, the avoidance vector is
        only rotated.
        """
        return replace(
            self,
            link_point=transform.transform_vector(self.link_point),
            obstacle_point=transform.transform_vector(self.obstacle_point),
            avoidance_vector=transform.rotate_vector(self.avoidance_vector))


def transform_distance_info(distance_info_map, transform):
    """Express every entry of a distance info map in another frame.

    Parameters
    ----------
    distance_info_map : dict[str, DistanceInfo]
        distance info keyed by link name.
    transform : constrained_ik.coordinates.Transform
        transform from the current frame to the new frame.

    Returns
    -------
    transformed_map : dict[str, DistanceInfo]
    """
    return {name: info.transformed(transform)
            for name, info in distance_info_map.items()}


class AllowedCollisionMatrix(object):
    """Symmetric set of name pairs for which contact is allowed.

    Allowed pairs are skipped by the proximity query.
    """

    def __init__(self, pairs=None):
        self._entries = set()
        for name1, name2 in (pairs or []):
            self.set_entry(name1, name2)

    def set_entry(self, name1, name2, allowed=True):
        key = frozenset((name1, name2))
        if allowed:
            self._entries.add(key)
        else:
            self._entries.discard(key)

    def get_entry(self, name1, name2):
        return frozenset((name1, name2)) in self._entries

    def __len__(self):
        return len(self._entries)


class LinkCollisionGeometry(object):
    """Collision geometry attached to a chain link.

    Parameters
    ----------
    link_name : str
        Name of the link to attach geometry to.
    geometry : CollisionGeometry
        Collision geometry in link-local frame.
    """

    def __init__(self, link_name, geometry):
        self.link_name = link_name
        self.geometry = geometry

    def get_world_geometry(self, link_pose):
        """Get geometry transformed by `link_pose` (link to world)."""
        return self.geometry.transform(link_pose.translation,
                                       link_pose.rotation)


class ProximityChecker(object):
    """Nearest obstacle query for the links of a kinematic chain.

    One call of :meth:`query_proximity` checks every monitored link
    against the other links of the chain and the world obstacles and
    keeps the nearest one per link.

    Parameters
    ----------
    chain : constrained_ik.model.KinematicChain
        chain whose `base_in_world` places the robot in world frame.
    distance_threshold : float or None
        pairs farther than this distance are not reported.
        `None` reports every pair.
    ignore_adjacent_links : bool
        if `True`, a link is never checked against its parent or child.

    Example
    -------
    >>> checker = ProximityChecker(chain, distance_threshold=0.5)
    >>> checker.add_link_capsule('link2', [0, 0, 0], [0, 0, 0.3], 0.05)
    >>> checker.add_world_obstacle(Sphere([0.3, 0, 0.5], 0.1), 'ball')
    >>> info_map = checker.query_proximity([0.0, 0.0], ['link2'])
    """

    def __init__(self, chain, distance_threshold=None,
                 ignore_adjacent_links=True):
        self.chain = chain
        self.distance_threshold = distance_threshold
        self.ignore_adjacent_links = ignore_adjacent_links
        self._link_geometries = []
        self._world_obstacles = []

    @property
    def link_geometries(self):
        return list(self._link_geometries)

    @property
    def world_obstacles(self):
        return list(self._world_obstacles)

    def add_link_geometry(self, link_name, geometry):
        if self.chain.find_link(link_name) is None:
            raise ValueError(
                'link {} is not in chain {}'.format(link_name, self.chain))
        if isinstance(geometry, HalfSpace):
            raise ValueError('half-space can not be attached to a link')
        lg = LinkCollisionGeometry(link_name, geometry)
        self._link_geometries.append(lg)
        return lg

    def add_link_sphere(self, link_name, center_local=None, radius=0.05):
        """Add a sphere in link-local frame.

        Parameters
        ----------
        link_name : str
            Link name.
        center_local : array (3,) or None
            Sphere center in link frame. Link origin if `None`.
        radius : float
            Sphere radius.
        """
        if center_local is None:
            center_local = np.zeros(3)
        return self.add_link_geometry(
            link_name, Sphere(center=center_local, radius=radius))

    def add_link_capsule(self, link_name, p1_local, p2_local, radius=0.05):
        return self.add_link_geometry(
            link_name, Capsule(p1=p1_local, p2=p2_local, radius=radius))

    def add_world_obstacle(self, geometry, name=None):
        """Add an obstacle given in world frame.

        Parameters
        ----------
        geometry : CollisionGeometry
            obstacle geometry in world frame.
        name : str or None
            obstacle name used for reporting and the allowed collision
            matrix. `obstacle_<index>` if `None`.
        """
        if name is None:
            name = 'obstacle_{}'.format(len(self._world_obstacles))
        self._world_obstacles.append((name, geometry))
        return name

    def add_ground_plane(self, height=0.0, name='ground'):
        return self.add_world_obstacle(
            HalfSpace(normal=[0.0, 0.0, 1.0], point=[0.0, 0.0, height]),
            name)

    def _adjacent_pairs(self):
        pairs = set()
        for link in self.chain.link_list:
            if link.parent is not None:
                pairs.add(frozenset((link.name, link.parent.name)))
        return pairs

    def query_proximity(self, joint_positions, link_names,
                        allowed_collision_matrix=None):
        """Find the nearest obstacle of every monitored link.

        Parameters
        ----------
        joint_positions : list[float] or numpy.ndarray
            joint positions of the whole chain.
        link_names : list[str] or set[str]
            links to be monitored.
        allowed_collision_matrix : AllowedCollisionMatrix or None
            pairs to be skipped.

        Returns
        -------
        distance_info_map : dict[str, DistanceInfo]
            nearest obstacle keyed by link name, in world frame. Links
            without geometry or without any pair within
            `distance_threshold` are absent.
        """
        if allowed_collision_matrix is None:
            allowed_collision_matrix = AllowedCollisionMatrix()
        link_poses = self.chain.forward_kinematics(joint_positions)
        base_in_world = self.chain.base_in_world
        world_geometries = []
        for lg in self._link_geometries:
            pose = link_poses[lg.link_name] * base_in_world
            world_geometries.append(
                (lg.link_name, lg.get_world_geometry(pose)))

        adjacent_pairs = self._adjacent_pairs() \
            if self.ignore_adjacent_links else set()
        monitored = set(link_names)
        distance_info_map = {}
        for link_name, geom in world_geometries:
            if link_name not in monitored:
                continue
            candidates = [(name, other) for name, other in world_geometries
                          if name != link_name
                          and frozenset((link_name, name))
                          not in adjacent_pairs]
            candidates.extend(self._world_obstacles)
            for obstacle_name, obstacle in candidates:
                if allowed_collision_matrix.get_entry(
                        link_name, obstacle_name):
                    continue
                dist, link_point, obstacle_point, direction = \
                    closest_points(geom, obstacle)
                if self.distance_threshold is not None \
                   and dist > self.distance_threshold:
                    continue
                current = distance_info_map.get(link_name)
                if current is None or dist < current.distance:
                    distance_info_map[link_name] = DistanceInfo(
                        link_name=link_name,
                        nearest_obstacle=obstacle_name,
                        distance=float(dist),
                        link_point=link_point,
                        obstacle_point=obstacle_point,
                        avoidance_vector=direction)
        logger.debug('proximity query found %d of %d links',
                     len(distance_info_map), len(monitored))
        return distance_info_map
