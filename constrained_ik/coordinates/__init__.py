from constrained_ik.coordinates.base import Transform
from constrained_ik.coordinates.math import convert_to_axis_vector
from constrained_ik.coordinates.math import cross_product
from constrained_ik.coordinates.math import normalize_vector
from constrained_ik.coordinates.math import rotation_matrix


__all__ = [
    'Transform',
    'convert_to_axis_vector',
    'cross_product',
    'normalize_vector',
    'rotation_matrix',
]
