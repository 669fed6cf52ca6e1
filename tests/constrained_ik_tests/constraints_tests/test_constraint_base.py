import unittest

import numpy as np
from numpy import testing

from constrained_ik.constraints import Constraint
from constrained_ik.constraints import ConstraintResults
from constrained_ik.constraints import SolverState


class TestConstraintResults(unittest.TestCase):

    def test_empty(self):
        results = ConstraintResults()
        self.assertTrue(results.is_empty())
        self.assertEqual(results.n_rows, 0)
        self.assertTrue(results.ok)

    def test_append(self):
        results = ConstraintResults()
        results.append(ConstraintResults(
            error=[0.1], jacobian=[[1.0, 2.0, 3.0]], status=True))
        self.assertEqual(results.n_rows, 1)
        self.assertEqual(results.jacobian.shape, (1, 3))
        self.assertTrue(results.status)

        results.append(ConstraintResults(
            error=[0.2], jacobian=[[4.0, 5.0, 6.0]], status=False))
        testing.assert_almost_equal(results.error, [0.1, 0.2])
        testing.assert_almost_equal(
            results.jacobian, [[1, 2, 3], [4, 5, 6]])
        self.assertFalse(results.status)

        results.append(ConstraintResults(
            error=[0.3], jacobian=[[0.0, 0.0, 0.0]], status=True))
        self.assertEqual(results.n_rows, 3)
        self.assertFalse(results.ok)

    def test_empty_with_columns(self):
        results = ConstraintResults(jacobian=np.zeros((0, 3)))
        self.assertTrue(results.is_empty())
        self.assertEqual(results.jacobian.shape, (0, 3))
        results.append(ConstraintResults(status=True))
        self.assertEqual(results.jacobian.shape, (0, 3))
        results.append(ConstraintResults(
            error=[0.1], jacobian=[[1.0, 2.0, 3.0]]))
        self.assertEqual(results.jacobian.shape, (1, 3))

    def test_append_empty_keeps_status(self):
        results = ConstraintResults(
            error=[0.1], jacobian=[[1.0, 0.0]], status=True)
        results.append(ConstraintResults(status=False))
        self.assertEqual(results.n_rows, 1)
        self.assertFalse(results.status)

    def test_append_column_mismatch(self):
        results = ConstraintResults(error=[0.1], jacobian=[[1.0, 0.0]])
        with self.assertRaises(ValueError):
            results.append(ConstraintResults(
                error=[0.1], jacobian=[[1.0, 0.0, 0.0]]))


class TestConstraint(unittest.TestCase):

    def test_base_constraint(self):
        constraint = Constraint()
        self.assertFalse(constraint.initialized)
        constraint.init('chain')
        self.assertTrue(constraint.initialized)
        self.assertEqual(constraint.chain, 'chain')
        with self.assertRaises(NotImplementedError):
            constraint.eval_constraint(SolverState(np.zeros(3)))

    def test_solver_state(self):
        state = SolverState([0, 1, 2])
        self.assertEqual(state.joints.dtype, np.float64)
        self.assertIsNone(state.collision_checker)
        self.assertIsNone(state.allowed_collision_matrix)
        self.assertEqual(state.iteration, 0)
