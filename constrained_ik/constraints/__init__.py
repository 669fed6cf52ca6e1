from constrained_ik.constraints.avoid_obstacles import AvoidObstacles
from constrained_ik.constraints.avoid_obstacles import calc_distance_error
from constrained_ik.constraints.avoid_obstacles import check_distance_status
from constrained_ik.constraints.avoid_obstacles import DEFAULTS
from constrained_ik.constraints.avoid_obstacles import LinkAvoidance
from constrained_ik.constraints.avoid_obstacles import project_jacobian
from constrained_ik.constraints.avoid_obstacles import ProximitySnapshot
from constrained_ik.constraints.base import ConfigurationError
from constrained_ik.constraints.base import Constraint
from constrained_ik.constraints.base import ConstraintResults
from constrained_ik.constraints.base import SolverState


__all__ = [
    'AvoidObstacles',
    'ConfigurationError',
    'Constraint',
    'ConstraintResults',
    'DEFAULTS',
    'LinkAvoidance',
    'ProximitySnapshot',
    'SolverState',
    'calc_distance_error',
    'check_distance_status',
    'project_jacobian',
]
