import numpy as np

from constrained_ik.coordinates.math import _check_valid_rotation
from constrained_ik.coordinates.math import _check_valid_translation
from constrained_ik.coordinates.math import rotation_matrix


class Transform(object):
    """Rigid transformation with a rotation and a translation.

    A transform maps points given in a frame `1` to a frame `2`,
    i.e. ``p_2 = R p_1 + t``.

    Parameters
    ----------
    translation : list or numpy.ndarray
        shape of (3,) translation vector. If `None`, zero vector.
    rotation : list or numpy.ndarray
        3x3 rotation matrix. If `None`, identity.
    """

    def __init__(self, translation=None, rotation=None):
        if translation is None:
            translation = np.zeros(3)
        if rotation is None:
            rotation = np.eye(3)
        self.translation = _check_valid_translation(translation)
        self.rotation = _check_valid_rotation(rotation)

    @classmethod
    def from_matrix(cls, matrix):
        """Create transform from a 4x4 homogeneous matrix."""
        matrix = np.array(matrix, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise ValueError('matrix must be 4x4, get {}'
                             .format(matrix.shape))
        return cls(matrix[:3, 3], matrix[:3, :3])

    @classmethod
    def from_axis_angle(cls, theta, axis, translation=None):
        return cls(translation, rotation_matrix(theta, axis))

    def transform_vector(self, vec):
        """Apply this transform to vector/vectors

        Parameters
        ----------
        vec : numpy.ndarray(3,) or numpy.ndarray(n_points, 3)
            vector/vectors to be transformed

        Returns
        -------
        vec_transformed : numpy.ndarray(3,) or numpy.ndarray(n_points, 3)
            transformed points
        """
        vec = np.asarray(vec, dtype=np.float64)
        assert vec.ndim < 3, "vec must be either 1 or 2 dimensional."
        if vec.ndim == 1:
            return self.rotation.dot(vec) + self.translation
        return self.rotation.dot(vec.T).T + self.translation[None, :]

    def rotate_vector(self, vec):
        """Rotate 3-dimensional vector using rotation of this Transform

        Translation is not applied, which is what direction vectors
        need.

        Parameters
        ----------
        vec : numpy.ndarray(3,) or numpy.ndarray(n_points, 3)
            vector (or vectors) to be rotated

        Returns
        -------
        vec_rotated : numpy.ndarray(3,) or numpy.ndarray(n_points, 3)
            rotated vector (or vectors)
        """
        vec = np.asarray(vec, dtype=np.float64)
        assert vec.ndim < 3, "vec must be either 1 or 2 dimensional."
        if vec.ndim == 1:
            return self.rotation.dot(vec)
        return self.rotation.dot(vec.T).T

    def inverse_transformation(self):
        """Return inverse transform

        Returns
        -------
        inv_transform : constrained_ik.coordinates.Transform
            inverse transformation
        """
        new_rot = self.rotation.T
        new_trans = -new_rot.dot(self.translation)
        return Transform(new_trans, new_rot)

    def __mul__(self, tf_23):
        """Composite this transform with other transform

        Parameters
        ----------
        tf_23 : constrained_ik.coordinates.Transform
            the other transform.

        Returns
        -------
        tf_13 : constrained_ik.coordinates.Transform
            Let this (self) transform as tf_12, then with the
            other transform tf_23, we obtain tf_13 = tf_12 * tf_23
        """
        tf_12 = self
        tran_12, rot_12 = tf_12.translation, tf_12.rotation
        tran_23, rot_23 = tf_23.translation, tf_23.rotation
        rot_13 = rot_23.dot(rot_12)
        tran_13 = tran_23 + rot_23.dot(tran_12)
        return Transform(tran_13, rot_13)

    def T(self):
        """Return 4x4 homogeneous transformation matrix."""
        matrix = np.eye(4)
        matrix[:3, :3] = self.rotation
        matrix[:3, 3] = self.translation
        return matrix

    def copy(self):
        return Transform(self.translation.copy(), self.rotation.copy())

    def __repr__(self):
        return '#<{} pos={} >'.format(
            self.__class__.__name__,
            np.array2string(self.translation, precision=4))
