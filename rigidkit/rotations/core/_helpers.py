from typing import Sequence

from rigidkit._algebra import as_array
from rigidkit._typing import ARRAY_LIKE, MATRIX, EULER_ORDER
from rigidkit.errors import InvalidArguments, ShapeMismatch


_AXIS_LETTERS = {'x': 1, 'y': 2, 'z': 3}


def _check_array_and_shape(input: ARRAY_LIKE, size: int, shape: Sequence[int]) -> MATRIX:
    array = as_array(input)

    if array.size != size:
        raise ShapeMismatch(f'The input must have {size} elements but has {array.size}')

    # reshape also breaks the link to the caller's array
    return array.reshape(shape).copy()


def _check_quaternion_array_and_shape(quaternion: ARRAY_LIKE) -> MATRIX:
    return _check_array_and_shape(quaternion, 4, (4,))


def _check_vector_array_and_shape(vector: ARRAY_LIKE) -> MATRIX:
    return _check_array_and_shape(vector, 3, (3,))


def _check_matrix_array_and_shape(matrix: ARRAY_LIKE) -> MATRIX:
    # flat input is read row major, [m00, m01, m02, m10, ...]
    return _check_array_and_shape(matrix, 9, (3, 3))


def _check_euler_order(order: EULER_ORDER) -> tuple[int, int, int]:
    """
    Converts an Euler sequence into zero based axis indices.

    Sequences are given as 1 based axis indices (``[3, 1, 3]``) or as letters (``'zxz'``).  Consecutive axes must be
    different.
    """

    if isinstance(order, str):
        try:
            indices = [_AXIS_LETTERS[letter] for letter in order.lower()]
        except KeyError:
            raise InvalidArguments('Order must only include x, y, and z.  You entered {}'.format(order))
    else:
        indices = [int(index) for index in order]

    if len(indices) != 3 or any(index not in (1, 2, 3) for index in indices):
        raise InvalidArguments('The Euler sequence must hold 3 axes out of 1, 2, 3.  You entered {}'.format(order))

    if indices[0] == indices[1] or indices[1] == indices[2]:
        raise InvalidArguments('Consecutive axes of an Euler sequence must differ.  You entered {}'.format(order))

    return indices[0] - 1, indices[1] - 1, indices[2] - 1
