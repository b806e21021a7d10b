# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Core conversion routines for rotation representations

This module contains the routines for converting between rotation matrices and the other rotation representations
(scalar last quaternions, axis/angle pairs, and intrinsic Euler angles).  All routines work on numpy arrays (or array
like objects) holding either floats or sympy expressions; symbolic input produces symbolic output.

The extraction routines (``rotmat_to_*``) raise :class:`.DegenerateRepresentation` at the configurations where the
requested representation is undefined instead of returning meaningless numbers.
"""

from typing import Sequence

import numpy as np

from rigidkit._algebra import (as_array, cos, sin, sqrt, acos, asin, atan2, clip_unit, determinant, is_null,
                               is_symbolic, exact, exact_operands, vector_norm)
from rigidkit._typing import ARRAY_LIKE, MATRIX, SCALAR, EULER_ORDER
from rigidkit.errors import DegenerateRepresentation
from rigidkit.rotations.core._helpers import (_check_matrix_array_and_shape, _check_quaternion_array_and_shape,
                                              _check_vector_array_and_shape, _check_euler_order)
from rigidkit.rotations.core.elementals import ELEMENTAL_ROTATIONS, skew


__all__ = ['quaternion_to_rotmat', 'axis_angle_to_rotmat', 'euler_to_rotmat',
           'rotmat_to_quaternion', 'rotmat_to_axis', 'rotmat_to_angle', 'rotmat_to_euler']


DEFAULT_DEGENERACY_TOLERANCE: float = 1e-10
"""
Magnitude below which a numeric axis, quaternion scalar term, or Euler node line is treated as null
"""


def quaternion_to_rotmat(quaternion: ARRAY_LIKE) -> MATRIX:
    r"""
    This function converts a scalar last rotation quaternion into its equivalent rotation matrix.

    With :math:`\mathbf{q}=[q_1, q_2, q_3, q_4]` and :math:`q_4` the scalar term, the matrix is

    .. math::
        \mathbf{T}=\left[\begin{array}{ccc}
        q_4^2+q_1^2-q_2^2-q_3^2 & 2(q_1q_2-q_4q_3) & 2(q_1q_3+q_4q_2) \\
        2(q_1q_2+q_4q_3) & q_4^2-q_1^2+q_2^2-q_3^2 & 2(q_2q_3-q_4q_1) \\
        2(q_1q_3-q_4q_2) & 2(q_2q_3+q_4q_1) & q_4^2-q_1^2-q_2^2+q_3^2 \end{array}\right]

    whose columns are the rotated canonical unit vectors.  The quaternion is used as given; it is not normalized.

    :param quaternion: The 4 element rotation quaternion to be converted
    :return: The rotation matrix corresponding to the quaternion
    """

    q1, q2, q3, q4 = _check_quaternion_array_and_shape(quaternion)

    return as_array([[q4**2 + q1**2 - q2**2 - q3**2, 2*(q1*q2 - q4*q3), 2*(q1*q3 + q4*q2)],
                     [2*(q1*q2 + q4*q3), q4**2 - q1**2 + q2**2 - q3**2, 2*(q2*q3 - q4*q1)],
                     [2*(q1*q3 - q4*q2), 2*(q2*q3 + q4*q1), q4**2 - q1**2 - q2**2 + q3**2]])


def axis_angle_to_rotmat(axis: ARRAY_LIKE, angle: SCALAR) -> MATRIX:
    r"""
    This function converts a unit rotation axis and a rotation angle into a rotation matrix (Rodrigues' formula).

    With :math:`\hat{\mathbf{x}}=[x, y, z]`, :math:`c=\text{cos}\theta`, :math:`s=\text{sin}\theta` and
    :math:`C=1-c`:

    .. math::
        \mathbf{T}=\left[\begin{array}{ccc}
        x^2C+c & xyC-zs & xzC+ys \\
        xyC+zs & y^2C+c & yzC-xs \\
        xzC-ys & yzC+xs & z^2C+c \end{array}\right]

    Column k of the result is canonical unit vector k rotated by :math:`\theta` about the axis.

    :param axis: The unit vector about which to rotate
    :param angle: The angle to rotate by in radians
    :return: The rotation matrix
    """

    axis, angle = exact_operands(_check_vector_array_and_shape(axis), angle)

    x, y, z = axis

    c = cos(angle)
    s = sin(angle)
    big_c = 1 - c

    return as_array([[x*x*big_c + c, x*y*big_c - z*s, x*z*big_c + y*s],
                     [x*y*big_c + z*s, y*y*big_c + c, y*z*big_c - x*s],
                     [x*z*big_c - y*s, y*z*big_c + x*s, z*z*big_c + c]])


def euler_to_rotmat(angles: Sequence[SCALAR], order: EULER_ORDER = (3, 1, 3)) -> MATRIX:
    r"""
    This function converts 3 intrinsic Euler angles into a rotation matrix.

    The rotations are applied about the axes of the progressively rotated basis, so the matrix is

    .. math::
        \mathbf{T}=\mathbf{R}_{o_1}(a)\mathbf{R}_{o_2}(b)\mathbf{R}_{o_3}(c)

    where :math:`o_i` are the axes in ``order`` and :math:`\mathbf{R}` the elemental rotations (see :func:`.rot_x`).
    ``order`` is either a sequence of 1 based axis indices such as ``[3, 1, 3]`` or a string such as ``'zxz'``.

    :param angles: The three Euler angles in radians
    :param order: The axes of the three rotations
    :return: The rotation matrix formed by the euler angles
    :raises InvalidArguments: When ``order`` is not a valid Euler sequence
    """

    axes = _check_euler_order(order)

    rotation = exact(np.eye(3)) if is_symbolic(list(angles)) else np.eye(3)

    for angle, axis in zip(angles, axes):
        rotation = rotation @ ELEMENTAL_ROTATIONS[axis](angle)

    return as_array(rotation)


def rotmat_to_quaternion(rotation_matrix: ARRAY_LIKE,
                         tolerance: float = DEFAULT_DEGENERACY_TOLERANCE) -> MATRIX:
    r"""
    This function converts a rotation matrix into a scalar last rotation quaternion.

    The scalar term is extracted first and the vector part from the antisymmetric part of the matrix:

    .. math::
        q_4 = \frac{1}{2}\sqrt{\text{Tr}(\mathbf{T})+1}\\
        q_1 = \frac{t_{32}-t_{23}}{4q_4}\qquad q_2 = \frac{t_{13}-t_{31}}{4q_4}\qquad q_3 = \frac{t_{21}-t_{12}}{4q_4}

    The returned quaternion always has a non-negative scalar term.  At a 180 degree rotation :math:`q_4` vanishes and
    the extraction is undefined.

    :param rotation_matrix: The rotation matrix to convert
    :param tolerance: The value of :math:`\text{Tr}(\mathbf{T})+1` at or below which the rotation is considered to
                      be 180 degrees (numeric input only)
    :return: The 4 element quaternion ``[q1, q2, q3, q4]``
    :raises DegenerateRepresentation: When the rotation angle is 180 degrees
    """

    matrix = _check_matrix_array_and_shape(rotation_matrix)

    trace_plus_one = np.trace(matrix) + 1

    if is_null(trace_plus_one, tolerance) or (not is_symbolic(trace_plus_one) and trace_plus_one < 0):
        raise DegenerateRepresentation('The quaternions are undefined for a rotation of 180 degrees')

    q4 = sqrt(trace_plus_one) / 2

    return as_array([(matrix[2, 1] - matrix[1, 2]) / (4 * q4),
                     (matrix[0, 2] - matrix[2, 0]) / (4 * q4),
                     (matrix[1, 0] - matrix[0, 1]) / (4 * q4),
                     q4])


def rotmat_to_axis(rotation_matrix: ARRAY_LIKE, tolerance: float = DEFAULT_DEGENERACY_TOLERANCE) -> MATRIX:
    r"""
    This function extracts the unit rotation axis of a rotation matrix.

    The axis is the normalized vector of the antisymmetric part of the matrix,
    :math:`[t_{32}-t_{23}, t_{13}-t_{31}, t_{21}-t_{12}]`, which has length :math:`2\text{sin}\theta`.  It therefore
    vanishes (and the axis is undefined) for rotations of 0 and 180 degrees.

    :param rotation_matrix: The rotation matrix
    :param tolerance: The length of the antisymmetric vector at or below which it is considered null
    :return: The unit rotation axis
    :raises DegenerateRepresentation: When the rotation angle is 0 or 180 degrees
    """

    matrix = _check_matrix_array_and_shape(rotation_matrix)

    axis = as_array([matrix[2, 1] - matrix[1, 2],
                     matrix[0, 2] - matrix[2, 0],
                     matrix[1, 0] - matrix[0, 1]])

    length = vector_norm(axis)

    if is_null(length, tolerance):
        raise DegenerateRepresentation('The rotation axis is undefined for rotations of 0 or 180 degrees')

    return as_array(axis / length)


def rotmat_to_angle(rotation_matrix: ARRAY_LIKE) -> SCALAR:
    r"""
    This function extracts the rotation angle of a rotation matrix as
    :math:`\theta=\text{cos}^{-1}\left(\frac{\text{Tr}(\mathbf{T})-1}{2}\right)`, which lies in :math:`[0, \pi]`.

    :param rotation_matrix: The rotation matrix
    :return: The rotation angle in radians
    """

    matrix = _check_matrix_array_and_shape(rotation_matrix)

    return acos(clip_unit((np.trace(matrix) - 1) / 2))


def _signed_angle(start: MATRIX, end: MATRIX, normal: MATRIX) -> SCALAR:
    """
    The angle from unit vector start to unit vector end, positive for right handed rotations about normal.
    """

    return atan2((skew(start) @ end) @ normal, start @ end)


def rotmat_to_euler(rotation_matrix: ARRAY_LIKE, order: EULER_ORDER = (3, 1, 3),
                    tolerance: float = DEFAULT_DEGENERACY_TOLERANCE) -> tuple[SCALAR, SCALAR, SCALAR]:
    r"""
    This function recovers the intrinsic Euler angles of a rotation matrix for the sequence ``order``.

    The decomposition is geometric.  Let :math:`\mathbf{e}_i` be the reference unit vectors and :math:`\mathbf{t}_i`
    the columns of the matrix (the rotated unit vectors).  The first rotation is about
    :math:`\mathbf{one}=\mathbf{e}_{o_1}` and the last about :math:`\mathbf{three}=\mathbf{t}_{o_3}`.

    * For symmetric sequences (:math:`o_1=o_3`) the middle angle is the angle between :math:`\mathbf{one}` and
      :math:`\mathbf{three}` and the intermediate axis is :math:`\mathbf{one}\times\mathbf{three}`.
    * For asymmetric sequences the middle angle is :math:`p\,\text{sin}^{-1}(\mathbf{one}\cdot\mathbf{three})` and the
      intermediate axis is :math:`-p\,\mathbf{one}\times\mathbf{three}`, where :math:`p=\pm 1` is the parity of the
      sequence.

    The first angle is then the signed angle from :math:`\mathbf{e}_{o_2}` to the intermediate axis about
    :math:`\mathbf{one}`, and the third the signed angle from the intermediate axis to :math:`\mathbf{t}_{o_2}` about
    :math:`\mathbf{three}`.

    The intermediate axis is null, and the decomposition undefined, when the middle angle is 0 or 180 degrees for
    symmetric sequences and +/-90 degrees for asymmetric ones.

    :param rotation_matrix: The rotation matrix to decompose
    :param order: The Euler sequence, e.g. ``[3, 1, 3]``, ``[1, 2, 3]`` or ``'zxz'``
    :param tolerance: The length of the intermediate axis at or below which it is considered null
    :return: The three Euler angles in radians, in the order of the sequence
    :raises DegenerateRepresentation: At the singular middle angles
    :raises InvalidArguments: When ``order`` is not a valid Euler sequence
    """

    first, second, third = _check_euler_order(order)

    matrix = _check_matrix_array_and_shape(rotation_matrix)

    reference = exact(np.eye(3)) if is_symbolic(matrix) else np.eye(3)

    one = reference[:, first]
    three = matrix[:, third]

    if first == third:
        two = skew(one) @ three
        middle = atan2(vector_norm(two), one @ three)

    else:
        parity = int(round(determinant(reference[:, [first, second, third]])))
        middle = parity * asin(clip_unit(one @ three))
        two = -parity * (skew(one) @ three)

    length = vector_norm(two)

    if is_null(length, tolerance):
        raise DegenerateRepresentation('The Euler angles {} are undefined at this middle angle'.format(
            [first + 1, second + 1, third + 1]))

    two = as_array(two / length)

    return (_signed_angle(reference[:, second], two, one),
            middle,
            _signed_angle(two, matrix[:, second], three))
