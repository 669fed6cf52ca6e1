import numpy as np

from constrained_ik.collision import ProximityChecker
from constrained_ik.coordinates import Transform
from constrained_ik.model import FixedJoint
from constrained_ik.model import KinematicChain
from constrained_ik.model import RotationalJoint


class SampleArm(KinematicChain):
    """Three joint arm with a yaw joint followed by two pitch joints.

    At zero joint positions every link stands on the z axis:
    link1 at 0.1, link2 at 0.4, link3 at 0.7 and tool_link at 0.9.
    """

    def __init__(self, base_in_world=None):
        super(SampleArm, self).__init__(
            'base_link', name='sample_arm', base_in_world=base_in_world)
        self.add_link('link1', RotationalJoint(
            axis='z', name='joint1', origin=Transform([0, 0, 0.1])))
        self.add_link('link2', RotationalJoint(
            axis='y', name='joint2', origin=Transform([0, 0, 0.3])))
        self.add_link('link3', RotationalJoint(
            axis='y', name='joint3', origin=Transform([0, 0, 0.3])))
        self.add_link('tool_link', FixedJoint(
            name='tool_joint', origin=Transform([0, 0, 0.2])))

    def reset_pose(self):
        return np.zeros(self.num_joints)

    def collision_checker(self, radius=0.05, distance_threshold=None):
        """Return a checker approximating the links by spheres and capsules."""
        checker = ProximityChecker(
            self, distance_threshold=distance_threshold)
        checker.add_link_sphere('link1', [0, 0, 0], radius)
        checker.add_link_capsule('link2', [0, 0, 0], [0, 0, 0.3], radius)
        checker.add_link_capsule('link3', [0, 0, 0], [0, 0, 0.2], radius)
        return checker
