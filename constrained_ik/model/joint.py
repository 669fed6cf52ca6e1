import numpy as np

from constrained_ik.coordinates import convert_to_axis_vector
from constrained_ik.coordinates import cross_product
from constrained_ik.coordinates import normalize_vector
from constrained_ik.coordinates import rotation_matrix
from constrained_ik.coordinates import Transform


def calc_target_joint_dimension(joint_list):
    """Calculate Total Degrees of Freedom from joint list

    Parameters
    ----------
    joint_list : list[constrained_ik.model.Joint]

    Returns
    -------
    n : int
        total Degrees of Freedom
    """
    n = 0
    for j in joint_list:
        n += j.joint_dof
    return n


class Joint(object):
    """Joint connecting a parent link to a child link.

    Parameters
    ----------
    name : str or None
        name of this joint.
    origin : constrained_ik.coordinates.Transform or None
        pose of the child link frame in the parent link frame when the
        joint position is zero.
    """

    def __init__(self, name=None, origin=None):
        self.name = name
        if origin is None:
            origin = Transform()
        self.origin = origin
        self.parent_link = None
        self.child_link = None

    @property
    def joint_dof(self):
        raise NotImplementedError

    def motion(self, joint_position):
        """Return the motion of the child frame caused by this joint."""
        raise NotImplementedError

    def child_transform(self, joint_position):
        """Return child link frame to parent link frame transform."""
        return self.motion(joint_position) * self.origin

    def calc_jacobian(self, jacobian, column, axis_world, joint_pos,
                      ref_pos):
        raise NotImplementedError

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        if self.name:
            prefix = self.__class__.__name__ + \
                ' ' + hex(id(self)) + ' ' + self.name
        else:
            prefix = self.__class__.__name__ + ' ' + hex(id(self))
        return '#<%s>' % prefix


class RotationalJoint(Joint):

    def __init__(self, axis='z', *args, **kwargs):
        super(RotationalJoint, self).__init__(*args, **kwargs)
        self.axis = normalize_vector(convert_to_axis_vector(axis))

    @property
    def joint_dof(self):
        """Returns DOF of rotational joint, 1."""
        return 1

    def motion(self, joint_position):
        return Transform(
            rotation=rotation_matrix(joint_position, self.axis,
                                     skip_normalization=True))

    def calc_jacobian(self, jacobian, column, axis_world, joint_pos,
                      ref_pos):
        return calc_jacobian_rotational(
            jacobian, column, axis_world, joint_pos, ref_pos)


class LinearJoint(Joint):

    def __init__(self, axis='z', *args, **kwargs):
        super(LinearJoint, self).__init__(*args, **kwargs)
        self.axis = normalize_vector(convert_to_axis_vector(axis))

    @property
    def joint_dof(self):
        """Returns DOF of linear joint, 1."""
        return 1

    def motion(self, joint_position):
        return Transform(translation=joint_position * self.axis)

    def calc_jacobian(self, jacobian, column, axis_world, joint_pos,
                      ref_pos):
        return calc_jacobian_linear(jacobian, column, axis_world)


class FixedJoint(Joint):

    def __init__(self, *args, **kwargs):
        super(FixedJoint, self).__init__(*args, **kwargs)
        self.axis = np.array([0.0, 0.0, 1.0])

    @property
    def joint_dof(self):
        """Returns DOF of fixed joint, 0."""
        return 0

    def motion(self, joint_position=None):
        return Transform()

    def calc_jacobian(self, jacobian, column, axis_world, joint_pos,
                      ref_pos):
        return jacobian


def calc_jacobian_rotational(jacobian, column, axis_world, joint_pos,
                             ref_pos):
    """Fill one column for a rotational joint.

    Rows 0-2 hold the linear velocity of `ref_pos` and rows 3-5 the
    angular velocity of the child link, both in base frame.
    """
    j_rot = axis_world
    p_diff = ref_pos - joint_pos
    j_translation = cross_product(j_rot, p_diff)
    jacobian[0:3, column] = j_translation
    jacobian[3:6, column] = j_rot
    return jacobian


def calc_jacobian_linear(jacobian, column, axis_world):
    jacobian[0:3, column] = axis_world
    jacobian[3:6, column] = 0.0
    return jacobian
