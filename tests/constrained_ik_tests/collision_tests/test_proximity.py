import unittest

import numpy as np
from numpy import pi
from numpy import testing

from constrained_ik.collision import AllowedCollisionMatrix
from constrained_ik.collision import DistanceInfo
from constrained_ik.collision import HalfSpace
from constrained_ik.collision import ProximityChecker
from constrained_ik.collision import Sphere
from constrained_ik.collision import transform_distance_info
from constrained_ik.coordinates import Transform
from constrained_ik.coordinates.math import rotation_matrix
from constrained_ik.models import SampleArm


class TestAllowedCollisionMatrix(unittest.TestCase):

    def test_entry(self):
        acm = AllowedCollisionMatrix([('link1', 'ball')])
        self.assertTrue(acm.get_entry('link1', 'ball'))
        self.assertTrue(acm.get_entry('ball', 'link1'))
        self.assertFalse(acm.get_entry('link2', 'ball'))
        acm.set_entry('ball', 'link1', allowed=False)
        self.assertFalse(acm.get_entry('link1', 'ball'))
        self.assertEqual(len(acm), 0)


class TestProximityChecker(unittest.TestCase):

    def setUp(self):
        self.chain = SampleArm()
        self.checker = self.chain.collision_checker()
        self.checker.add_world_obstacle(
            Sphere(center=[0.3, 0.0, 0.5], radius=0.05), name='ball')
        self.av = self.chain.reset_pose()

    def test_add_geometry(self):
        self.assertEqual(len(self.checker.link_geometries), 3)
        self.assertEqual(len(self.checker.world_obstacles), 1)
        name = self.checker.add_world_obstacle(
            Sphere(center=[1, 0, 0], radius=0.1))
        self.assertEqual(name, 'obstacle_1')
        with self.assertRaises(ValueError):
            self.checker.add_link_sphere('unknown_link')
        with self.assertRaises(ValueError):
            self.checker.add_link_geometry(
                'link1', HalfSpace(normal=[0, 0, 1], point=[0, 0, 0]))

    def test_query_world_obstacle(self):
        info_map = self.checker.query_proximity(self.av, ['link2'])
        self.assertEqual(list(info_map.keys()), ['link2'])
        info = info_map['link2']
        self.assertEqual(info.link_name, 'link2')
        self.assertEqual(info.nearest_obstacle, 'ball')
        testing.assert_almost_equal(info.distance, 0.2)
        testing.assert_almost_equal(info.link_point, [0.05, 0, 0.5])
        testing.assert_almost_equal(info.obstacle_point, [0.25, 0, 0.5])
        testing.assert_almost_equal(info.avoidance_vector, [-1, 0, 0])

    def test_query_all_links(self):
        info_map = self.checker.query_proximity(
            self.av, ['link1', 'link2', 'link3', 'tool_link'])
        # tool_link has no geometry
        self.assertEqual(set(info_map.keys()), {'link1', 'link2', 'link3'})
        testing.assert_almost_equal(info_map['link1'].distance, 0.4)
        self.assertEqual(info_map['link1'].nearest_obstacle, 'ball')
        testing.assert_almost_equal(info_map['link3'].distance,
                                    np.sqrt(0.13) - 0.1)

    def test_self_collision(self):
        checker = self.chain.collision_checker()
        info_map = checker.query_proximity(self.av, ['link1'])
        info = info_map['link1']
        # link2 is adjacent to link1
        self.assertEqual(info.nearest_obstacle, 'link3')
        testing.assert_almost_equal(info.distance, 0.5)
        testing.assert_almost_equal(info.avoidance_vector, [0, 0, -1])

        checker.ignore_adjacent_links = False
        info = checker.query_proximity(self.av, ['link1'])['link1']
        self.assertEqual(info.nearest_obstacle, 'link2')
        testing.assert_almost_equal(info.distance, 0.2)

    def test_allowed_collision_matrix(self):
        acm = AllowedCollisionMatrix()
        acm.set_entry('link2', 'ball')
        info_map = self.checker.query_proximity(self.av, ['link2'], acm)
        self.assertNotIn('link2', info_map)

    def test_distance_threshold(self):
        self.checker.distance_threshold = 0.1
        info_map = self.checker.query_proximity(self.av, ['link2'])
        self.assertEqual(info_map, {})
        self.checker.distance_threshold = 0.25
        info_map = self.checker.query_proximity(self.av, ['link2'])
        self.assertIn('link2', info_map)

    def test_ground_plane(self):
        checker = ProximityChecker(self.chain)
        checker.add_link_sphere('tool_link', radius=0.05)
        checker.add_ground_plane(height=0.1)
        av = np.array([0.0, pi / 2.0, pi / 2.0])
        # tool_link is at [0.3, 0, 0.2] pointing downward
        info = checker.query_proximity(av, ['tool_link'])['tool_link']
        self.assertEqual(info.nearest_obstacle, 'ground')
        testing.assert_almost_equal(info.distance, 0.05)
        testing.assert_almost_equal(info.link_point, [0.3, 0, 0.15])
        testing.assert_almost_equal(info.avoidance_vector, [0, 0, 1])

    def test_base_in_world(self):
        chain = SampleArm(base_in_world=Transform([1.0, 0.0, 0.0]))
        checker = chain.collision_checker()
        checker.add_world_obstacle(
            Sphere(center=[1.3, 0.0, 0.5], radius=0.05), name='ball')
        info = checker.query_proximity(chain.reset_pose(), ['link2'])['link2']
        testing.assert_almost_equal(info.distance, 0.2)
        testing.assert_almost_equal(info.link_point, [1.05, 0, 0.5])


class TestTransformDistanceInfo(unittest.TestCase):

    def test_transform_distance_info(self):
        info = DistanceInfo(
            link_name='link2',
            nearest_obstacle='ball',
            distance=0.1,
            link_point=np.array([1.0, 0.5, 0.5]),
            obstacle_point=np.array([1.0, 0.6, 0.5]),
            avoidance_vector=np.array([0.0, -1.0, 0.0]))
        base_in_world = Transform([1.0, 0.0, 0.0],
                                  rotation_matrix(pi / 2.0, 'z'))
        info_map = transform_distance_info(
            {'link2': info}, base_in_world.inverse_transformation())
        transformed = info_map['link2']
        self.assertEqual(transformed.link_name, 'link2')
        self.assertEqual(transformed.distance, 0.1)
        testing.assert_almost_equal(transformed.link_point, [0.5, 0, 0.5])
        testing.assert_almost_equal(transformed.obstacle_point,
                                    [0.6, 0, 0.5])
        testing.assert_almost_equal(transformed.avoidance_vector,
                                    [-1, 0, 0])
        # input is not modified
        testing.assert_almost_equal(info.link_point, [1.0, 0.5, 0.5])
