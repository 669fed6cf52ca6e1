"""Constraint pushing chain links away from nearby obstacles.

Each monitored link contributes one row to the stacked IK problem. The
error is a sigmoid of the distance to the nearest obstacle, so that the
repulsion ramps up smoothly inside the avoidance region instead of
switching on at a hard threshold. The jacobian row is the rate of change
of the distance along the avoidance direction, observed at the point of
the link closest to the obstacle.
"""

from dataclasses import dataclass
from logging import getLogger

import numpy as np
from scipy.special import expit

from constrained_ik.collision.proximity import transform_distance_info
from constrained_ik.constraints.base import ConfigurationError
from constrained_ik.constraints.base import Constraint
from constrained_ik.constraints.base import ConstraintResults
from constrained_ik.kinematics import ChainJacobianSolver
from constrained_ik.kinematics import change_ref_point


logger = getLogger(__name__)


@dataclass(frozen=True)
class AvoidanceDefaults:
    weight: float = 1.0
    min_distance: float = 0.1
    avoidance_distance: float = 0.3
    amplitude: float = 0.3
    shift: float = 5.0
    zero_point: float = 10.0


DEFAULTS = AvoidanceDefaults()


def calc_distance_error(distance, avoidance_distance, amplitude,
                        shift=DEFAULTS.shift, zero_point=DEFAULTS.zero_point):
    """Return the repulsion magnitude for a distance to an obstacle.

    .. math::
        e(d) = \\frac{A}{1 + \\exp(d / s_x - shift)}, \\quad
        s_x = \\frac{d_{avoid}}{zero\\_point + shift}

    The error is bounded in (0, amplitude), tends to amplitude as the
    distance goes to zero and vanishes past `avoidance_distance`.

    Parameters
    ----------
    distance : float
        distance between the link and its nearest obstacle.
    avoidance_distance : float
        size of the activation region. Must be positive.
    amplitude : float
        maximum repulsion.
    shift : float
        offset of the sigmoid.
    zero_point : float
        the error is close to zero at
        ``distance = avoidance_distance * zero_point / (zero_point + shift)``.

    Returns
    -------
    error : float
        repulsion magnitude.
    """
    scale_x = avoidance_distance / (zero_point + shift)
    return float(amplitude * expit(shift - distance / scale_x))


def project_jacobian(jacobian, tip_position, closest_point,
                     avoidance_vector, num_robot_joints):
    """Reduce a link jacobian to a single row along the avoidance vector.

    Parameters
    ----------
    jacobian : numpy.ndarray
        (6, n_inboard) jacobian of the link with the link origin
        (`tip_position`) as reference point.
    tip_position : numpy.ndarray
        current reference point of `jacobian`.
    closest_point : numpy.ndarray
        point of the link closest to the obstacle.
    avoidance_vector : numpy.ndarray
        unit vector pointing away from the obstacle.
    num_robot_joints : int
        number of joints of the whole chain.

    Returns
    -------
    row : numpy.ndarray
        (1, num_robot_joints) row. Columns of joints which can not move
        the link are zero.
    """
    link_jacobian = change_ref_point(
        jacobian, np.asarray(closest_point) - np.asarray(tip_position))
    row = np.zeros((1, num_robot_joints), dtype=np.float64)
    n_inboard = link_jacobian.shape[1]
    row[0, :n_inboard] = np.dot(avoidance_vector, link_jacobian[:3])
    return row


def check_distance_status(distance, min_distance):
    """Return `True` if `distance` is acceptable to stop with."""
    return not distance < min_distance


def _check_weight(weight):
    if not weight > 0:
        raise ValueError('weight must be positive, get {}'.format(weight))
    return float(weight)


def _check_min_distance(min_distance):
    if not min_distance >= 0:
        raise ValueError(
            'min_distance must be non negative, get {}'.format(
                min_distance))
    return float(min_distance)


def _check_avoidance_distance(avoidance_distance):
    if not avoidance_distance > 0:
        raise ValueError(
            'avoidance_distance must be positive, get {}'.format(
                avoidance_distance))
    return float(avoidance_distance)


def _check_amplitude(amplitude):
    if not amplitude >= 0:
        raise ValueError(
            'amplitude must be non negative, get {}'.format(amplitude))
    return float(amplitude)


class LinkAvoidance(object):
    """Avoidance parameters and bound jacobian solver of one link.

    Parameters
    ----------
    link_name : str
        name of the monitored link.
    """

    def __init__(self, link_name):
        self.link_name = link_name
        self.weight = DEFAULTS.weight
        self.min_distance = DEFAULTS.min_distance
        self.avoidance_distance = DEFAULTS.avoidance_distance
        self.amplitude = DEFAULTS.amplitude
        self.num_robot_joints = 0
        self.num_inboard_joints = 0
        self.avoid_chain = None
        self.jac_solver = None

    def bind(self, sub_chain, num_robot_joints):
        self.avoid_chain = sub_chain
        self.num_robot_joints = num_robot_joints
        self.num_inboard_joints = sub_chain.num_joints
        self.jac_solver = ChainJacobianSolver(sub_chain)

    def __repr__(self):
        return '#<{} {} min={} avoid={} amp={}>'.format(
            self.__class__.__name__, self.link_name, self.min_distance,
            self.avoidance_distance, self.amplitude)


class ProximitySnapshot(object):
    """Joint positions and nearest obstacles at one solver iteration.

    The collision checker is queried once for every monitored link and
    the result is expressed in the chain base frame.

    Parameters
    ----------
    state : constrained_ik.constraints.SolverState
        current solver state.
    parent : AvoidObstacles
        constraint owning the monitored links.
    """

    def __init__(self, state, parent):
        if state.collision_checker is None:
            raise ConfigurationError(
                'Avoid Obstacles: solver state has no collision checker')
        if len(state.joints) != parent.chain.num_joints:
            raise ValueError(
                'length of joints must be {}, get {}'.format(
                    parent.chain.num_joints, len(state.joints)))
        self.joints = np.array(state.joints, dtype=np.float64)
        distance_map = state.collision_checker.query_proximity(
            self.joints, parent.link_names,
            state.allowed_collision_matrix)
        tf = parent.chain.base_in_world.inverse_transformation()
        self.distance_info_map = transform_distance_info(distance_map, tf)

    def get(self, link_name):
        return self.distance_info_map.get(link_name)


class AvoidObstacles(Constraint):
    """Keep the monitored links of a chain away from obstacles.

    Parameters
    ----------
    link_names : list[str] or None
        links to be monitored, registered with default parameters.
        If nothing is registered when :meth:`init` is called, every
        link of the chain is monitored.
    debug : bool
        if `True`, links without proximity and the result of every
        evaluation are logged at debug level.

    Examples
    --------
    >>> constraint = AvoidObstacles()
    >>> constraint.load_parameters({
    ...     'link_names': ['link2', 'link3'],
    ...     'amplitude': [0.3, 0.2],
    ...     'minimum_distance': [0.1, 0.05]})
    >>> constraint.init(chain)
    >>> results = constraint.eval_constraint(
    ...     SolverState(joints, collision_checker=checker))
    """

    def __init__(self, link_names=None, debug=False):
        super(AvoidObstacles, self).__init__(debug=debug)
        # insertion ordered
        self._links = {}
        for link_name in (link_names or []):
            self.add_link(link_name)

    @property
    def link_names(self):
        return list(self._links.keys())

    @property
    def links(self):
        return list(self._links.values())

    @property
    def weights(self):
        """Weights of the error rows, in row order."""
        return np.array([link.weight for link in self._links.values()],
                        dtype=np.float64)

    def get_link(self, link_name):
        try:
            return self._links[link_name]
        except KeyError:
            raise ConfigurationError(
                'Avoid Obstacles: link {} is not registered, '
                'call add_link first'.format(link_name))

    def add_link(self, link_name):
        """Register `link_name` with default parameters.

        Nothing is changed if the link is already registered.
        """
        if link_name not in self._links:
            self._links[link_name] = LinkAvoidance(link_name)
        return self._links[link_name]

    def set_weight(self, link_name, weight):
        self.get_link(link_name).weight = _check_weight(weight)

    def set_min_distance(self, link_name, min_distance):
        self.get_link(link_name).min_distance = \
            _check_min_distance(min_distance)

    def set_avoidance_distance(self, link_name, avoidance_distance):
        self.get_link(link_name).avoidance_distance = \
            _check_avoidance_distance(avoidance_distance)

    def set_amplitude(self, link_name, amplitude):
        self.get_link(link_name).amplitude = _check_amplitude(amplitude)

    def get_weight(self, link_name):
        return self.get_link(link_name).weight

    def get_min_distance(self, link_name):
        return self.get_link(link_name).min_distance

    def get_avoidance_distance(self, link_name):
        return self.get_link(link_name).avoidance_distance

    def get_amplitude(self, link_name):
        return self.get_link(link_name).amplitude

    def load_parameters(self, params):
        """Register links and their parameters from a mapping.

        Parameters
        ----------
        params : dict
            ``link_names`` is a list of link names. ``amplitude``,
            ``minimum_distance``, ``avoidance_distance`` and ``weight``
            are optional lists of the same length. A list whose length
            differs from ``link_names`` is ignored and defaults are used
            for that parameter only.

        Raises
        ------
        ValueError
            if a value is out of range. Nothing is registered or changed
            in that case.
        """
        link_names = params.get('link_names')
        if link_names is None:
            logger.warning(
                'Avoid Obstacles: Unable to retrieve link_names member, '
                'default parameter will be used.')
            return

        checks = [('amplitude', 'amplitude', _check_amplitude),
                  ('minimum_distance', 'min_distance', _check_min_distance),
                  ('avoidance_distance', 'avoidance_distance',
                   _check_avoidance_distance),
                  ('weight', 'weight', _check_weight)]
        values = {}
        for key, attr, check in checks:
            value = params.get(key)
            if value is None:
                logger.warning(
                    'Avoid Obstacles: Unable to retrieve %s member, '
                    'default parameter will be used.', key)
                continue
            if len(value) != len(link_names):
                logger.warning(
                    'Avoid Obstacles: %s member must be same size array as '
                    'link_names member, default parameters will be used.',
                    key)
                continue
            # validated before any link is touched
            values[attr] = [check(v) for v in value]

        for i, link_name in enumerate(link_names):
            link = self.add_link(link_name)
            for attr, link_values in values.items():
                setattr(link, attr, link_values[i])

    def init(self, chain):
        """Bind every monitored link to `chain`.

        Parameters
        ----------
        chain : constrained_ik.model.KinematicChain
            chain to be solved.

        Raises
        ------
        ConfigurationError
            if a monitored link can not be reached from the chain base.
            The constraint stays invalid.
        """
        self.initialized = False
        self.chain = chain
        if len(self._links) == 0:
            for link_name in chain.link_names:
                self.add_link(link_name)
            logger.warning(
                'Avoid Obstacles: No links were specified therefore using '
                'all links in kinematic chain.')

        num_robot_joints = chain.num_joints
        for link in self._links.values():
            sub_chain = chain.get_sub_chain(link.link_name)
            if sub_chain is None:
                logger.error(
                    'Failed to initialize Avoid Obstacles constraint '
                    'because it failed to create a chain between links: '
                    "'%s' and '%s'", chain.base_link_name, link.link_name)
                raise ConfigurationError(
                    'no chain between {} and {}'.format(
                        chain.base_link_name, link.link_name))
            link.bind(sub_chain, num_robot_joints)
        self.initialized = True

    bind = init

    def eval_constraint(self, state):
        """Evaluate every monitored link at `state`.

        Parameters
        ----------
        state : constrained_ik.constraints.SolverState
            current solver state.

        Returns
        -------
        results : constrained_ik.constraints.ConstraintResults
            one error row and one jacobian row per monitored link in
            registration order. The status is `False` if any link is
            closer than its minimum distance.
        """
        if not self.initialized:
            raise ConfigurationError(
                'Avoid Obstacles: constraint is not initialized')
        output = ConstraintResults(
            jacobian=np.zeros((0, self.chain.num_joints)))
        cdata = ProximitySnapshot(state, self)
        for link in self._links.values():
            tmp = ConstraintResults(
                error=[self.calc_error(cdata, link)],
                jacobian=self.calc_jacobian(cdata, link),
                status=self.check_status(cdata, link))
            output.append(tmp)
        if self.debug:
            logger.debug(
                'Avoid Obstacles: iteration %d error %s status %s',
                state.iteration, output.error, output.status)
        return output

    evaluate = eval_constraint

    def calc_error(self, cdata, link):
        info = cdata.get(link.link_name)
        if info is None:
            if self.debug:
                logger.debug('Unable to retrieve distance info, '
                             "couldn't find link with that name %s",
                             link.link_name)
            return 0.0
        return calc_distance_error(
            info.distance, link.avoidance_distance, link.amplitude)

    def calc_jacobian(self, cdata, link):
        info = cdata.get(link.link_name)
        if info is None:
            if self.debug:
                logger.debug('Unable to retrieve distance info, '
                             "couldn't find link with that name %s",
                             link.link_name)
            return np.zeros((1, link.num_robot_joints), dtype=np.float64)
        joints = cdata.joints[:link.num_inboard_joints]
        jacobian, tip_position = link.jac_solver.jacobian_and_tip_at(joints)
        return project_jacobian(jacobian, tip_position, info.link_point,
                                info.avoidance_vector, link.num_robot_joints)

    def check_status(self, cdata, link):
        """Return `True` if it is ok to stop with the current state."""
        info = cdata.get(link.link_name)
        if info is None:
            if self.debug:
                logger.debug("couldn't find link with that name %s",
                             link.link_name)
            return True
        return check_distance_status(info.distance, link.min_distance)
