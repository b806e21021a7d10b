# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


from rigidkit._algebra import as_array, cos, sin
from rigidkit._typing import ARRAY_LIKE, MATRIX, SCALAR
from rigidkit.rotations.core._helpers import _check_vector_array_and_shape


__all__ = ["rot_x", "rot_y", "rot_z", "skew"]


def rot_x(theta: SCALAR) -> MATRIX:
    r"""
    This function forms the matrix of a right handed rotation about the x axis by angle theta.

    Mathematically this rotation is defined as:

    .. math::
        \mathbf{R}_x(\theta)=\left[\begin{array}{ccc} 1 & 0 & 0 \\
        0 & \text{cos}(\theta) & -\text{sin}(\theta) \\
        0 & \text{sin}(\theta) & \text{cos}(\theta) \end{array}\right]

    The columns are the rotated x, y, z unit vectors.  Theta should be in units of radians and can be a float or a
    sympy expression, in which case a symbolic (object) matrix is returned.  For example::

        >>> from rigidkit.rotations import rot_x
        >>> rot_x(0.5)
        array([[ 1.        ,  0.        ,  0.        ],
               [ 0.        ,  0.87758256, -0.47942554],
               [ 0.        ,  0.47942554,  0.87758256]])

    :param theta: The angle to form the rotation matrix for
    :return: The rotation matrix corresponding to the rotation angle
    """

    ctheta = cos(theta)
    stheta = sin(theta)

    return as_array([[1, 0, 0],
                     [0, ctheta, -stheta],
                     [0, stheta, ctheta]])


def rot_y(theta: SCALAR) -> MATRIX:
    r"""
    This function forms the matrix of a right handed rotation about the y axis by angle theta.

    This rotation is defined as:

    .. math::
        \mathbf{R}_y(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & 0 & \text{sin}(\theta) \\
        0 & 1 & 0 \\
        -\text{sin}(\theta) & 0 & \text{cos}(\theta) \end{array}\right]

    :param theta: The angle to form the rotation matrix for
    :return: The rotation matrix corresponding to the rotation angle
    """

    ctheta = cos(theta)
    stheta = sin(theta)

    return as_array([[ctheta, 0, stheta],
                     [0, 1, 0],
                     [-stheta, 0, ctheta]])


def rot_z(theta: SCALAR) -> MATRIX:
    r"""
    This function forms the matrix of a right handed rotation about the z axis by angle theta.

    This rotation is defined as:

    .. math::
        \mathbf{R}_z(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & -\text{sin}(\theta) & 0 \\
        \text{sin}(\theta) & \text{cos}(\theta) & 0 \\
        0 & 0 & 1 \end{array}\right]

    :param theta: The angle to form the rotation matrix for
    :return: The rotation matrix corresponding to the rotation angle
    """

    ctheta = cos(theta)
    stheta = sin(theta)

    return as_array([[ctheta, -stheta, 0],
                     [stheta, ctheta, 0],
                     [0, 0, 1]])


ELEMENTAL_ROTATIONS = (rot_x, rot_y, rot_z)
"""
The elemental rotations indexed by zero based axis
"""


def skew(vector: ARRAY_LIKE) -> MATRIX:
    r"""
    This function returns the skew symmetric cross product matrix for vector.

    The skew symmetric cross product matrix is defined such that:

    .. math::
        \mathbf{a}\times\mathbf{b}=\left[\mathbf{a}\times\right]\mathbf{b} \\
        \left[\mathbf{a}\times\right] = \left[\begin{array}{ccc} 0 & -a_3 & a_2 \\
        a_3 & 0 & -a_1 \\
        -a_2 & a_1 & 0 \end{array}\right]

    where :math:`\times` indicates the cross product and :math:`\left[\bullet\times\right]` is the skew symmetric cross
    product matrix

    :param vector: The 3 element vector to compute a skew symmetric matrix for
    :return: The skew symmetric cross product matrix corresponding to the vector
    """

    vector = _check_vector_array_and_shape(vector)

    return as_array([[0, -vector[2], vector[1]],
                     [vector[2], 0, -vector[0]],
                     [-vector[1], vector[0], 0]])
