import numpy as np

from constrained_ik.coordinates import cross_product


def change_ref_point(jacobian, offset):
    """Change the reference point of a 6xN jacobian.

    The body is unchanged, only the observed point on it moves. The
    angular part (rows 3-5) is kept and the linear part (rows 0-2) of
    each column becomes :math:`v + \\omega \\times r` where :math:`r`
    is `offset`.

    Parameters
    ----------
    jacobian : numpy.ndarray
        jacobian of shape (6, n_joint). Rows 0-2 are linear velocity
        and rows 3-5 are angular velocity.
    offset : numpy.ndarray
        vector from the current reference point to the new one,
        expressed in the same frame as the jacobian.

    Returns
    -------
    new_jacobian : numpy.ndarray
        jacobian of shape (6, n_joint) referring to the new point.
    """
    jacobian = np.asarray(jacobian, dtype=np.float64)
    offset = np.asarray(offset, dtype=np.float64)
    new_jacobian = jacobian.copy()
    for column in range(jacobian.shape[1]):
        new_jacobian[0:3, column] += cross_product(
            jacobian[3:6, column], offset)
    return new_jacobian


class ChainJacobianSolver(object):
    """Jacobian of the tip link of a chain.

    Parameters
    ----------
    chain : constrained_ik.model.KinematicChain
        chain whose tip link origin is the reference point.
    """

    def __init__(self, chain):
        self.chain = chain

    @property
    def num_joints(self):
        return self.chain.num_joints

    def jacobian_at(self, joint_positions):
        """Return the (6, num_joints) jacobian in base frame."""
        jacobian, _ = self.jacobian_and_tip_at(joint_positions)
        return jacobian

    def tip_position_at(self, joint_positions):
        poses = self.chain.forward_kinematics(joint_positions)
        return poses[self.chain.tip_link_name].translation

    def jacobian_and_tip_at(self, joint_positions):
        """Compute jacobian and tip position with one forward kinematics.

        Parameters
        ----------
        joint_positions : list[float] or numpy.ndarray
            positions of the movable joints of the chain.

        Returns
        -------
        jacobian : numpy.ndarray
            (6, num_joints) jacobian. Rows 0-2 are linear velocity of the
            tip origin and rows 3-5 are angular velocity.
        tip_position : numpy.ndarray
            (3,) tip origin in base frame.
        """
        poses = self.chain.forward_kinematics(joint_positions)
        tip_position = poses[self.chain.tip_link_name].translation
        jacobian = np.zeros((6, self.num_joints), dtype=np.float64)
        column = 0
        for link in self.chain.link_list[1:]:
            joint = link.joint
            if joint.joint_dof == 0:
                continue
            pose = poses[link.name]
            axis_world = pose.rotate_vector(joint.axis)
            joint.calc_jacobian(jacobian, column, axis_world,
                                pose.translation, tip_position)
            column += joint.joint_dof
        return jacobian, tip_position
