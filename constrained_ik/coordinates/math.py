import numpy as np


_AXIS_VECTORS = {
    'x': np.array([1, 0, 0]),
    'y': np.array([0, 1, 0]),
    'z': np.array([0, 0, 1]),
    '-x': np.array([-1, 0, 0]),
    '-y': np.array([0, -1, 0]),
    '-z': np.array([0, 0, -1]),
}


def convert_to_axis_vector(axis):
    """Convert axis to float vector.

    Parameters
    ----------
    axis : list or numpy.ndarray or str
        axis indicated by 'x', 'y', 'z' (optionally negated) or
        a 3 dimensional vector.

    Returns
    -------
    axis : numpy.ndarray
        converted axis

    Examples
    --------
    >>> from constrained_ik.coordinates.math import convert_to_axis_vector
    >>> convert_to_axis_vector('x')
    array([1., 0., 0.])
    >>> convert_to_axis_vector([0, 1, 1])
    array([0., 1., 1.])
    """
    if isinstance(axis, str):
        try:
            return _AXIS_VECTORS[axis].astype(np.float64)
        except KeyError:
            raise NotImplementedError(
                "Axis conversion for '{}' is not implemented.".format(axis))
    axis = np.array(axis, dtype=np.float64)
    if axis.shape != (3,):
        raise ValueError(
            "Axis must be of shape (3,), get {}".format(axis.shape))
    return axis


def normalize_vector(v, ord=2):
    """Return normalized vector

    Parameters
    ----------
    v : list or numpy.ndarray
        vector
    ord : int (optional)
        ord of np.linalg.norm

    Returns
    -------
    v : numpy.ndarray
        normalized vector

    Examples
    --------
    >>> from constrained_ik.coordinates.math import normalize_vector
    >>> normalize_vector([1, 1, 1])
    array([0.57735027, 0.57735027, 0.57735027])
    >>> normalize_vector([0, 0, 0])
    array([0., 0., 0.])
    """
    v = np.array(v, dtype=np.float64)
    norm = np.linalg.norm(v, ord=ord)
    if norm == 0:
        return v
    return v / norm


def outer_product_matrix(v):
    """Returns outer product matrix of given v.

    Returns following outer product matrix.

    .. math::
        \\left(
            \\begin{array}{ccc}
              0 & -v_2 & v_1 \\\\
              v_2 & 0 & -v_0 \\\\
              -v_1 & v_0 & 0
            \\end{array}
        \\right)

    Parameters
    ----------
    v : numpy.ndarray or list
        [x, y, z]

    Returns
    -------
    matrix : numpy.ndarray
        3x3 skew symmetric matrix.
    """
    return np.array([[0, -v[2], v[1]],
                     [v[2], 0, -v[0]],
                     [-v[1], v[0], 0]])


def cross_product(a, b):
    """Return cross product.

    Parameters
    ----------
    a : numpy.ndarray
        3-dimensional vector.
    b : numpy.ndarray
        3-dimensional vector.

    Returns
    -------
    cross_prod : numpy.ndarray
        calculated cross product
    """
    return np.dot(outer_product_matrix(a), b)


def rotation_matrix(theta, axis, skip_normalization=False):
    """Return the rotation matrix.

    Return the rotation matrix associated with counterclockwise rotation
    about the given axis by theta radians.

    Parameters
    ----------
    theta : float
        radian
    axis : str or list or numpy.ndarray
        rotation axis such that 'x', 'y', 'z'
        [0, 0, 1], [0, 1, 0], [1, 0, 0]
    skip_normalization : bool
        if `True`, skip normalization for axis.

    Returns
    -------
    rot : numpy.ndarray
        rotation matrix about the given axis by theta radians.
    """
    axis = convert_to_axis_vector(axis)
    if not skip_normalization:
        axis = normalize_vector(axis)
    a = np.cos(theta / 2.0)
    b, c, d = -axis * np.sin(theta / 2.0)
    aa, bb, cc, dd = a * a, b * b, c * c, d * d
    bc, ad, ac, ab, bd, cd = b * c, a * d, a * c, a * b, b * d, c * d
    return np.array([[aa + bb - cc - dd, 2 * (bc + ad), 2 * (bd - ac)],
                     [2 * (bc - ad), aa + cc - bb - dd, 2 * (cd + ab)],
                     [2 * (bd + ac), 2 * (cd - ab), aa + dd - bb - cc]])


def _check_valid_rotation(rotation):
    """Checks that the given rotation matrix is valid."""
    rotation = np.array(rotation, dtype=np.float64)
    if rotation.shape != (3, 3):
        raise ValueError('Rotation must be specified as a 3x3 ndarray')
    if np.abs(np.linalg.det(rotation) - 1.0) > 1e-3:
        raise ValueError('Illegal rotation. Must have determinant == 1.0, '
                         'get {}'.format(np.linalg.det(rotation)))
    return rotation


def _check_valid_translation(translation):
    """Checks that the translation vector is valid."""
    translation = np.array(translation, dtype=np.float64)
    if translation.shape != (3,):
        raise ValueError('Translation must be specified as a (3,) ndarray')
    return translation
