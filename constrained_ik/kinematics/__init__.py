from constrained_ik.kinematics.jacobian import ChainJacobianSolver
from constrained_ik.kinematics.jacobian import change_ref_point


__all__ = [
    'ChainJacobianSolver',
    'change_ref_point',
]
