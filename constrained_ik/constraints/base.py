import numpy as np


class ConfigurationError(Exception):
    """Raised when a constraint can not be configured or bound."""


class SolverState(object):
    """State handed to every constraint at each solver iteration.

    Parameters
    ----------
    joints : list[float] or numpy.ndarray
        joint positions of the whole chain in chain order.
    collision_checker : object or None
        object providing
        ``query_proximity(joints, link_names, allowed_collision_matrix)``,
        e.g. :class:`constrained_ik.collision.ProximityChecker`.
    allowed_collision_matrix : AllowedCollisionMatrix or None
        pairs skipped by the proximity query.
    iteration : int
        index of the current iteration.
    """

    def __init__(self, joints, collision_checker=None,
                 allowed_collision_matrix=None, iteration=0):
        self.joints = np.asarray(joints, dtype=np.float64)
        self.collision_checker = collision_checker
        self.allowed_collision_matrix = allowed_collision_matrix
        self.iteration = iteration


class ConstraintResults(object):
    """Error, jacobian and status stacked over constraint rows.

    Parameters
    ----------
    error : numpy.ndarray or None
        error vector of shape (n_rows,).
    jacobian : numpy.ndarray or None
        jacobian of shape (n_rows, n_joints).
    status : bool
        `True` if it is acceptable to stop with the current state.
    """

    def __init__(self, error=None, jacobian=None, status=True):
        if error is None:
            error = np.zeros(0)
        self.error = np.asarray(error, dtype=np.float64).reshape(-1)
        if jacobian is None:
            jacobian = np.zeros((0, 0))
        self.jacobian = np.atleast_2d(np.asarray(jacobian, dtype=np.float64))
        self.status = bool(status)

    @property
    def ok(self):
        return self.status

    @property
    def n_rows(self):
        return len(self.error)

    def is_empty(self):
        return self.n_rows == 0

    def append(self, other):
        """Stack rows of `other` below the rows of this result.

        The status becomes the logical AND of both statuses.
        """
        if other.is_empty():
            self.status = self.status and other.status
            return self
        if self.is_empty():
            self.error = other.error.copy()
            self.jacobian = other.jacobian.copy()
        else:
            if self.jacobian.shape[1] != other.jacobian.shape[1]:
                raise ValueError(
                    'jacobian column size differ : {} and {}'.format(
                        self.jacobian.shape[1], other.jacobian.shape[1]))
            self.error = np.hstack((self.error, other.error))
            self.jacobian = np.vstack((self.jacobian, other.jacobian))
        self.status = self.status and other.status
        return self

    def __repr__(self):
        return '#<{} rows={} status={}>'.format(
            self.__class__.__name__, self.n_rows, self.status)


class Constraint(object):
    """Base class of constraints stacked by a constrained IK solver.

    Subclasses implement :meth:`eval_constraint` and may override
    :meth:`init` to bind themselves to the kinematic chain and
    :meth:`load_parameters` to read a parameter mapping.
    """

    def __init__(self, debug=False):
        self.debug = debug
        self.initialized = False
        self.chain = None

    def init(self, chain):
        self.chain = chain
        self.initialized = True

    def load_parameters(self, params):
        pass

    def eval_constraint(self, state):
        raise NotImplementedError
