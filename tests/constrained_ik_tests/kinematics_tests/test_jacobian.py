import copy
import unittest

import numpy as np
from numpy import testing

from constrained_ik.coordinates import Transform
from constrained_ik.kinematics import ChainJacobianSolver
from constrained_ik.kinematics import change_ref_point
from constrained_ik.model import KinematicChain
from constrained_ik.model import LinearJoint
from constrained_ik.model import RotationalJoint
from constrained_ik.models import SampleArm


def jacobian_test_util(func, x0, jac, decimal=5):
    # test jacobian by comparing the resulting and numerical jacobian
    f0 = func(x0)
    n_dim = len(x0)

    eps = 1e-7
    jac_numerical = np.zeros(jac.shape)
    for idx in range(n_dim):
        x1 = copy.copy(x0)
        x1[idx] += eps
        f1 = func(x1)
        jac_numerical[:, idx] = (f1 - f0) / eps
    testing.assert_almost_equal(jac, jac_numerical, decimal=decimal)


class TestChainJacobianSolver(unittest.TestCase):

    @classmethod
    def setup_class(cls):
        cls.chain = SampleArm()
        cls.av = np.array([0.4, -0.6, 0.9])

    def test_jacobian_zero_pose(self):
        solver = ChainJacobianSolver(self.chain.get_sub_chain('link2'))
        self.assertEqual(solver.num_joints, 2)
        jacobian = solver.jacobian_at([0.0, 0.0])
        testing.assert_almost_equal(
            jacobian,
            [[0, 0],
             [0, 0],
             [0, 0],
             [0, 0],
             [0, 1],
             [1, 0]])

    def test_jacobian_numerical(self):
        chain = self.chain
        solver = ChainJacobianSolver(chain)
        jacobian, tip_position = solver.jacobian_and_tip_at(self.av)
        testing.assert_almost_equal(tip_position,
                                    solver.tip_position_at(self.av))
        self.assertEqual(jacobian.shape, (6, 3))

        def func(av):
            return solver.tip_position_at(av)
        jacobian_test_util(func, self.av.copy(), jacobian[:3])

    def test_jacobian_angular(self):
        solver = ChainJacobianSolver(self.chain)
        jacobian = solver.jacobian_at(self.av)
        poses = self.chain.forward_kinematics(self.av)
        testing.assert_almost_equal(jacobian[3:, 0], [0, 0, 1])
        testing.assert_almost_equal(
            jacobian[3:, 1], poses['link2'].rotate_vector(np.array([0, 1, 0])))
        testing.assert_almost_equal(
            jacobian[3:, 2], poses['link3'].rotate_vector(np.array([0, 1, 0])))

    def test_jacobian_linear_joint(self):
        chain = KinematicChain('base')
        chain.add_link('slider', LinearJoint(axis='y'))
        chain.add_link('arm', RotationalJoint(
            axis='x', origin=Transform([0, 0, 0.2])))
        solver = ChainJacobianSolver(chain)
        av = np.array([0.3, 0.5])
        jacobian = solver.jacobian_at(av)
        testing.assert_almost_equal(jacobian[:, 0], [0, 1, 0, 0, 0, 0])

        def func(av):
            return solver.tip_position_at(av)
        jacobian_test_util(func, av.copy(), jacobian[:3])

    def test_no_joint(self):
        solver = ChainJacobianSolver(self.chain.get_sub_chain('base_link'))
        jacobian, tip_position = solver.jacobian_and_tip_at([])
        self.assertEqual(jacobian.shape, (6, 0))
        testing.assert_equal(tip_position, [0, 0, 0])


class TestChangeRefPoint(unittest.TestCase):

    def test_change_ref_point(self):
        jacobian = np.array([[0.0], [0.0], [0.0], [0.0], [1.0], [0.0]])
        new_jacobian = change_ref_point(jacobian, [0.0, 0.0, 0.1])
        testing.assert_almost_equal(new_jacobian[:, 0],
                                    [0.1, 0, 0, 0, 1, 0])
        # input is kept
        testing.assert_equal(jacobian[:3, 0], [0, 0, 0])

    def test_change_ref_point_numerical(self):
        chain = SampleArm()
        sub_chain = chain.get_sub_chain('link3')
        solver = ChainJacobianSolver(sub_chain)
        av = np.array([0.2, 0.7, -0.3])
        point_local = np.array([0.05, -0.02, 0.12])

        def func(av):
            poses = sub_chain.forward_kinematics(av)
            return poses['link3'].transform_vector(point_local)

        jacobian, tip_position = solver.jacobian_and_tip_at(av)
        new_jacobian = change_ref_point(jacobian, func(av) - tip_position)
        testing.assert_almost_equal(new_jacobian[3:], jacobian[3:])
        jacobian_test_util(func, av.copy(), new_jacobian[:3])
