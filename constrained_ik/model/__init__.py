from constrained_ik.model.chain import KinematicChain
from constrained_ik.model.chain import Link
from constrained_ik.model.joint import FixedJoint
from constrained_ik.model.joint import Joint
from constrained_ik.model.joint import LinearJoint
from constrained_ik.model.joint import RotationalJoint


__all__ = [
    'FixedJoint',
    'Joint',
    'KinematicChain',
    'LinearJoint',
    'Link',
    'RotationalJoint',
]
