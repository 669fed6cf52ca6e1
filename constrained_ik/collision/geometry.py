"""Collision geometry primitives.

This module provides the collision geometry primitives (Sphere, Capsule,
HalfSpace) used by the proximity checker. Link geometries are given in
link-local frame and placed in world frame with :meth:`transform`.

Example
-------
>>> import numpy as np
>>> from constrained_ik.collision import Sphere
>>> s = Sphere(center=np.array([0.0, 0.0, 0.1]), radius=0.05)
>>> s.transform(np.array([1.0, 0.0, 0.0]), np.eye(3)).center
array([1. , 0. , 0.1])
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class CollisionGeometry:
    """Base class for collision geometries."""

    def transform(self, position, rotation):
        """Transform geometry to world frame.

        Parameters
        ----------
        position : array (3,)
            Translation vector.
        rotation : array (3, 3)
            Rotation matrix.

        Returns
        -------
        CollisionGeometry
            Transformed geometry in world frame.
        """
        raise NotImplementedError


@dataclass
class Sphere(CollisionGeometry):
    """Sphere collision geometry.

    Parameters
    ----------
    center : array (3,)
        Center position.
    radius : float
        Radius.
    """
    center: np.ndarray
    radius: float

    def __post_init__(self):
        self.center = np.asarray(self.center, dtype=np.float64)
        self.radius = float(self.radius)

    def transform(self, position, rotation):
        new_center = position + np.matmul(rotation, self.center)
        return Sphere(center=new_center, radius=self.radius)


@dataclass
class Capsule(CollisionGeometry):
    """Capsule collision geometry (line segment + radius).

    A capsule is defined by two endpoints and a radius.
    It's the Minkowski sum of a line segment and a sphere.

    Parameters
    ----------
    p1 : array (3,)
        First endpoint.
    p2 : array (3,)
        Second endpoint.
    radius : float
        Capsule radius.
    """
    p1: np.ndarray
    p2: np.ndarray
    radius: float

    def __post_init__(self):
        self.p1 = np.asarray(self.p1, dtype=np.float64)
        self.p2 = np.asarray(self.p2, dtype=np.float64)
        self.radius = float(self.radius)

    def transform(self, position, rotation):
        new_p1 = position + np.matmul(rotation, self.p1)
        new_p2 = position + np.matmul(rotation, self.p2)
        return Capsule(p1=new_p1, p2=new_p2, radius=self.radius)


@dataclass
class HalfSpace(CollisionGeometry):
    """Infinite half-space bounded by a plane.

    Points with ``dot(normal, x - point) < 0`` are inside.

    Parameters
    ----------
    normal : array (3,)
        Outward normal of the bounding plane. Normalized on creation.
    point : array (3,)
        A point on the bounding plane.
    """
    normal: np.ndarray
    point: np.ndarray

    def __post_init__(self):
        normal = np.asarray(self.normal, dtype=np.float64)
        self.normal = normal / np.linalg.norm(normal)
        self.point = np.asarray(self.point, dtype=np.float64)

    def transform(self, position, rotation):
        new_normal = np.matmul(rotation, self.normal)
        new_point = position + np.matmul(rotation, self.point)
        return HalfSpace(normal=new_normal, point=new_point)
