# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This module provides the :class:`Basis` class, the rotation representation engine of rigidkit.

A :class:`Basis` is an orthonormal right handed triple of unit vectors stored as the 3x3 matrix :attr:`Basis.m` whose
columns are the unit vectors expressed in the canonical basis.  Equivalently, :attr:`Basis.m` maps the components of a
vector in this basis to its components in the canonical basis.  Whatever reference a basis is built relative to, the
stored matrix is always absolute:

.. math::
    \mathbf{m} = \mathbf{m}_{ref}\mathbf{m}_{given}

The matrix can hold floats or sympy expressions.  Symbolic bases built from functions of :data:`.TIME` support the
angular velocity (:meth:`Basis.omega`) and acceleration (:meth:`Basis.alpha`) queries.

Bases are immutable.  Every operation (rotation, composition, substitution) returns a new instance of the same class
carrying the same :class:`BasisOptions`.

Example::

    >>> import numpy as np
    >>> from rigidkit import Basis
    >>> b1 = Basis([0, 0, 1], np.pi/2)
    >>> b2 = Basis.from_euler([0.1, 0.2, 0.3], [3, 1, 3], reference=b1)
    >>> np.round(b2.euler(b1), 6)
    array([0.1, 0.2, 0.3])
"""

import copy

import logging

import warnings

from dataclasses import dataclass

from typing import Any, Sequence, Self

import numpy as np

import sympy

from rigidkit._algebra import (as_array, exact_operands, is_symbolic, simplify as simplify_array, substitute,
                               free_symbols, determinant, solve, vector_norm, is_null, all_close)
from rigidkit._typing import ARRAY_LIKE, MATRIX, SCALAR, EULER_ORDER
from rigidkit.errors import InvalidArguments, DegenerateRepresentation, ShapeMismatch
from rigidkit.rotations.core.conversions import (DEFAULT_DEGENERACY_TOLERANCE, quaternion_to_rotmat,
                                                 axis_angle_to_rotmat, euler_to_rotmat, rotmat_to_quaternion,
                                                 rotmat_to_axis, rotmat_to_angle, rotmat_to_euler)
from rigidkit.rotations.core._helpers import (_check_matrix_array_and_shape, _check_quaternion_array_and_shape,
                                              _check_vector_array_and_shape)
from rigidkit.rotations.core.elementals import rot_x, rot_y, rot_z
from rigidkit.tensors import Tensor
from rigidkit.utilities.options import UserOptions
from rigidkit.utilities.mixin_classes import UserOptionConfigured


__all__ = ['BasisOptions', 'Basis', 'CANONICAL_BASIS']


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
This is the logging interface for reporting status, results, issues, and other information.
"""


@dataclass
class BasisOptions(UserOptions):
    """
    This dataclass serves as one way to control the settings for the :class:`.Basis` class (and so for
    :class:`.Frame` and :class:`.RigidBody`).

    You can set any of the options on an instance of this dataclass and pass it to the constructor or any factory
    method to set the corresponding attributes of the new instance.  Derived values (rotations, compositions,
    substitutions) carry the options of the value they were derived from.
    """

    simplify: bool = True
    """
    Whether symbolic matrices are run through ``sympy.simplify`` when stored and when returned.

    Simplification can be very expensive for large expressions.  Turn it off to defer the cost and call
    :meth:`.Basis.simplified` once at the end instead.
    """

    equality_eps_factor: float = 100.0
    r"""
    The multiple of machine epsilon tolerated by ``==``.

    Two numeric matrices are equal when every element satisfies
    :math:`|a-b|\le f\epsilon(\max(1,|a|)+\max(1,|b|))`.
    """

    orthonormality_tolerance: float = 1e-12
    """
    The absolute tolerance on the elements of ``m.T @ m - I`` used by :meth:`.Basis.isunitary`
    """

    degeneracy_tolerance: float = DEFAULT_DEGENERACY_TOLERANCE
    """
    The magnitude below which a numeric axis, quaternion scalar term, or Euler node line is considered null
    """


def _absolute_matrix(relative: MATRIX, reference: 'Basis | None') -> MATRIX:
    """
    Converts a rotation matrix relative to ``reference`` into the matrix relative to the canonical basis.
    """

    if reference is None:
        return relative

    return _product(reference.m, relative)


def _product(first: MATRIX, second: MATRIX) -> MATRIX:
    first, second = exact_operands(first, second)

    return first @ second


def _unit(vector: MATRIX, tolerance: float, name: str) -> MATRIX:
    """
    Normalizes a numeric vector, warning if it was not already of unit length.  Symbolic vectors are used as given.
    """

    if is_symbolic(vector):
        return vector

    length = vector_norm(vector)

    if is_null(length, tolerance):
        raise DegenerateRepresentation(f'The {name} cannot be null')

    if abs(length - 1) > tolerance:
        warnings.warn(f'The {name} {vector} is not of unit length.  It has been normalized.')
        return vector / length

    return vector


def _quaternion_matrix(quaternion: ARRAY_LIKE, tolerance: float) -> MATRIX:
    quaternion = _check_quaternion_array_and_shape(quaternion)

    return quaternion_to_rotmat(_unit(quaternion, tolerance, 'quaternion'))


def _axis_angle_matrix(axis: Any, angle: SCALAR, reference: 'Basis | None', tolerance: float) -> MATRIX:
    # a Tensor axis is a geometric vector; plain components are relative to the reference already
    if isinstance(axis, Tensor):
        axis = axis.components(reference)

    try:
        axis = _check_vector_array_and_shape(axis)
        angle = as_array(angle)

    except ShapeMismatch:
        raise

    except (TypeError, ValueError) as err:
        raise InvalidArguments('The axis must be a 3 element vector and the angle a scalar') from err

    if angle.size != 1:
        raise InvalidArguments('The rotation angle must be a scalar')

    return axis_angle_to_rotmat(_unit(axis, tolerance, 'rotation axis'), angle.ravel()[0])


def _columns_matrix(items: Sequence[Any], reference: 'Basis | None') -> MATRIX:
    """
    Assembles a matrix from three columns, each given either as a single 3 element item or as three scalar items.
    """

    columns = []
    pending = []

    for item in items:

        if isinstance(item, Tensor):
            if item.ndims != 1:
                raise InvalidArguments('Columns given as tensors must be vectors')
            item = item.components(reference)

        try:
            array = as_array(item)

        except (TypeError, ValueError) as err:
            raise InvalidArguments(f'Cannot interpret {item!r} as a column or a column element') from err

        if array.size == 1:
            pending.append(array.ravel()[0])

            if len(pending) == 3:
                columns.append(pending)
                pending = []

        elif array.size == 3 and not pending:
            columns.append(list(array.ravel()))

        else:
            raise InvalidArguments('Each column must be a 3 element vector or a run of 3 scalars')

    if pending or len(columns) != 3:
        raise InvalidArguments(f'Could not assemble 3 columns from {len(items)} arguments')

    return as_array(columns).T


class Basis(UserOptionConfigured[BasisOptions], BasisOptions):
    """
    An orthonormal right handed basis represented by its 3x3 rotation matrix with respect to the canonical basis.

    The constructor interprets its positional arguments based on how many there are and how many elements each holds.
    A trailing :class:`Basis` (when there is more than one argument) is the reference the rest is relative to:

    ==========================================  ======================================================================
    Arguments                                   Interpretation
    ==========================================  ======================================================================
    ``()``                                      the canonical basis
    ``(basis)``                                 a copy of ``basis``
    ``(matrix)``                                a 3x3 matrix, or 9 elements read row major
                                                (``[m00, m01, m02, m10, ...]``)
    ``(quaternion)``                            a 4 element scalar last quaternion
    ``(axis, angle)``                           a rotation of ``angle`` radians about ``axis``
    ``(c1, c2, c3)``                            three columns, each a 3 element vector or ...
    ``(x1, y1, z1, c2, c3)``, ... ``(9 x s)``   ... a run of 3 scalars (3, 5, 7 or 9 arguments)
    any of the above followed by a basis        the same, relative to that basis
    ==========================================  ======================================================================

    Anything else raises :class:`.InvalidArguments`.  The ``from_*`` class methods offer the same constructions with
    explicit names and an explicit ``reference`` keyword and should be preferred in new code.

    Numeric quaternions and axes that are not of unit length are normalized with a warning.  Matrices and columns
    are stored as given, so it is the caller's responsibility that they are orthonormal (see :meth:`isunitary`).

    The options of :class:`BasisOptions` are available as attributes of the instance.
    """

    def __init__(self, *args: Any, options: BasisOptions | None = None):
        """
        :param args: The rotation data, see the class documentation
        :param options: The options to configure the basis with
        :raises InvalidArguments: When the arguments cannot be interpreted
        :raises DegenerateRepresentation: When a null quaternion or axis is given
        """

        super().__init__(BasisOptions, options=options)

        self._m: MATRIX = np.eye(3)
        """
        The rotation matrix from this basis to the canonical basis
        """

        if args:
            self._store(self._interpret(args))

    def _interpret(self, args: tuple) -> MATRIX:
        """
        Resolves the constructor arguments into the absolute rotation matrix.
        """

        reference = None

        if len(args) > 1 and isinstance(args[-1], Basis):
            reference = args[-1]
            args = args[:-1]

        if len(args) == 1:
            data = args[0]

            if isinstance(data, Basis):
                _LOGGER.debug('Copying a basis')
                return _absolute_matrix(data.m, reference)

            if isinstance(data, Tensor):
                data = data.components()

            size = as_array(data).size

            if size == 9:
                _LOGGER.debug('Interpreting the input as a rotation matrix')
                relative = _check_matrix_array_and_shape(data)

            elif size == 4:
                _LOGGER.debug('Interpreting the input as a quaternion')
                relative = _quaternion_matrix(data, self.degeneracy_tolerance)

            else:
                raise InvalidArguments(f'A single argument must be a basis, a quaternion or a matrix, '
                                       f'not an input with {size} elements')

        elif len(args) == 2:
            _LOGGER.debug('Interpreting the input as an axis and an angle')
            relative = _axis_angle_matrix(args[0], args[1], reference, self.degeneracy_tolerance)

        elif len(args) in (3, 5, 7, 9):
            _LOGGER.debug(f'Interpreting {len(args)} arguments as the columns of the matrix')
            relative = _columns_matrix(args, reference)

        else:
            raise InvalidArguments(f'Cannot build a basis from {len(args)} arguments')

        return _absolute_matrix(relative, reference)

    def _store(self, matrix: ARRAY_LIKE) -> None:
        matrix = _check_matrix_array_and_shape(matrix)

        if self.simplify and is_symbolic(matrix):
            matrix = simplify_array(matrix)

        self._m = matrix

    def _derive(self, matrix: ARRAY_LIKE) -> Self:
        """
        Returns a shallow copy of self (same class, options, and any other state) holding a new matrix.
        """

        out = copy.copy(self)
        out._store(matrix)

        return out

    def _tidy(self, value: Any) -> Any:
        """
        Simplifies symbolic results if requested by the options.
        """

        if not (self.simplify and is_symbolic(value)):
            return value

        if isinstance(value, sympy.Basic):
            return sympy.simplify(value)

        return simplify_array(value)

    @classmethod
    def _from_canonical(cls, matrix: ARRAY_LIKE, options: BasisOptions | None) -> Self:
        out = cls(options=options)
        out._store(matrix)
        return out

    @classmethod
    def from_matrix(cls, matrix: ARRAY_LIKE, reference: 'Basis | None' = None,
                    options: BasisOptions | None = None) -> Self:
        """
        Creates a basis from its rotation matrix relative to ``reference``.

        :param matrix: The 9 element rotation matrix (read row major if flat)
        :param reference: The reference basis (canonical if ``None``)
        :param options: The options for the new basis
        :return: The new basis
        :raises ShapeMismatch: If the matrix does not hold 9 elements
        """

        return cls._from_canonical(_absolute_matrix(_check_matrix_array_and_shape(matrix), reference), options)

    @classmethod
    def from_quaternion(cls, quaternion: ARRAY_LIKE, reference: 'Basis | None' = None,
                        options: BasisOptions | None = None) -> Self:
        """
        Creates a basis from a scalar last quaternion ``[q1, q2, q3, q4]`` relative to ``reference``.

        :param quaternion: The quaternion
        :param reference: The reference basis (canonical if ``None``)
        :param options: The options for the new basis
        :return: The new basis
        """

        tolerance = (options or BasisOptions()).degeneracy_tolerance

        return cls._from_canonical(_absolute_matrix(_quaternion_matrix(quaternion, tolerance), reference), options)

    @classmethod
    def from_axis_angle(cls, axis: ARRAY_LIKE | Tensor, angle: SCALAR, reference: 'Basis | None' = None,
                        options: BasisOptions | None = None) -> Self:
        """
        Creates a basis by rotating ``reference`` by ``angle`` radians about ``axis``.

        Array axes are expressed in ``reference``, :class:`.Tensor` axes are geometric vectors.

        :param axis: The rotation axis
        :param angle: The rotation angle in radians
        :param reference: The reference basis (canonical if ``None``)
        :param options: The options for the new basis
        :return: The new basis
        """

        tolerance = (options or BasisOptions()).degeneracy_tolerance

        return cls._from_canonical(_absolute_matrix(_axis_angle_matrix(axis, angle, reference, tolerance), reference),
                                   options)

    @classmethod
    def from_columns(cls, first: Any, second: Any, third: Any, reference: 'Basis | None' = None,
                     options: BasisOptions | None = None) -> Self:
        """
        Creates a basis from its three unit vectors.

        Array columns are expressed in ``reference``, :class:`.Tensor` columns are geometric vectors.

        :param first: The first unit vector
        :param second: The second unit vector
        :param third: The third unit vector
        :param reference: The reference basis (canonical if ``None``)
        :param options: The options for the new basis
        :return: The new basis
        """

        return cls._from_canonical(_absolute_matrix(_columns_matrix([first, second, third], reference), reference),
                                   options)

    @classmethod
    def from_euler(cls, angles: Sequence[SCALAR], order: EULER_ORDER = (3, 1, 3), reference: 'Basis | None' = None,
                   options: BasisOptions | None = None) -> Self:
        """
        Creates a basis by successive intrinsic rotations of ``reference`` (see :func:`.euler_to_rotmat`).

        :param angles: The three Euler angles in radians
        :param order: The Euler sequence
        :param reference: The reference basis (canonical if ``None``)
        :param options: The options for the new basis
        :return: The new basis
        """

        if len(angles) != 3:
            raise InvalidArguments('Exactly 3 Euler angles are required')

        return cls._from_canonical(_absolute_matrix(euler_to_rotmat(angles, order), reference), options)

    @property
    def m(self) -> MATRIX:
        """
        The rotation matrix from this basis to the canonical basis (a copy).
        """

        return self._m.copy()

    @property
    def is_symbolic(self) -> bool:
        """
        Whether the matrix holds sympy expressions
        """

        return is_symbolic(self._m)

    def matrix(self, reference: 'Basis | None' = None) -> MATRIX:
        r"""
        Returns the rotation matrix from this basis to ``reference``, :math:`\mathbf{m}_{ref}^T\mathbf{m}`.

        :param reference: The basis to express this one in (canonical if ``None``)
        :return: The relative rotation matrix
        """

        if reference is None:
            return self._tidy(self._m.copy())

        matrix, own = exact_operands(reference.m, self._m)

        return self._tidy(as_array(matrix.T @ own))

    def i(self) -> Tensor:
        """
        The first unit vector of this basis, as a vector with components ``[1, 0, 0]`` in this basis.
        """

        return Tensor(self._m[:, 0])

    def j(self) -> Tensor:
        """
        The second unit vector of this basis, as a vector with components ``[0, 1, 0]`` in this basis.
        """

        return Tensor(self._m[:, 1])

    def k(self) -> Tensor:
        """
        The third unit vector of this basis, as a vector with components ``[0, 0, 1]`` in this basis.
        """

        return Tensor(self._m[:, 2])

    def rotaxis(self, reference: 'Basis | None' = None) -> Tensor:
        """
        Returns the unit axis of the rotation from ``reference`` to this basis.

        The axis is the same when expressed in either basis.

        :param reference: The basis the rotation starts from (canonical if ``None``)
        :return: The rotation axis
        :raises DegenerateRepresentation: If the rotation angle is 0 or 180 degrees
        """

        axis = rotmat_to_axis(self.matrix(reference), self.degeneracy_tolerance)

        return Tensor(self._tidy(axis), reference)

    def rotangle(self, reference: 'Basis | None' = None) -> SCALAR:
        """
        Returns the angle, in [0, pi], of the rotation from ``reference`` to this basis.

        :param reference: The basis the rotation starts from (canonical if ``None``)
        :return: The rotation angle in radians
        """

        return self._tidy(rotmat_to_angle(self.matrix(reference)))

    def quaternions(self, reference: 'Basis | None' = None) -> MATRIX:
        """
        Returns the scalar last quaternion ``[q1, q2, q3, q4]`` of the rotation from ``reference`` to this basis.

        The scalar term is non-negative.

        :param reference: The basis the rotation starts from (canonical if ``None``)
        :return: The quaternion
        :raises DegenerateRepresentation: If the rotation angle is 180 degrees
        """

        return self._tidy(rotmat_to_quaternion(self.matrix(reference), self.degeneracy_tolerance))

    def euler(self, reference: 'Basis | None' = None,
              order: EULER_ORDER = (3, 1, 3)) -> tuple[SCALAR, SCALAR, SCALAR]:
        """
        Returns the intrinsic Euler angles of the rotation from ``reference`` to this basis.

        Symmetric sequences return a middle angle in [0, pi], asymmetric ones in [-pi/2, pi/2].

        :param reference: The basis the rotation starts from (canonical if ``None``)
        :param order: The Euler sequence, such as ``[3, 1, 3]``, ``[1, 2, 3]`` or ``'zxz'``
        :return: The three angles in radians
        :raises DegenerateRepresentation: At the singular middle angles of the sequence
        """

        angles = rotmat_to_euler(self.matrix(reference), order, self.degeneracy_tolerance)

        return tuple(self._tidy(angle) for angle in angles)

    def rotatex(self, angle: SCALAR) -> Self:
        """
        Returns this basis rotated by ``angle`` about its own first axis.
        """

        return self._derive(_product(self._m, rot_x(angle)))

    def rotatey(self, angle: SCALAR) -> Self:
        """
        Returns this basis rotated by ``angle`` about its own second axis.
        """

        return self._derive(_product(self._m, rot_y(angle)))

    def rotatez(self, angle: SCALAR) -> Self:
        """
        Returns this basis rotated by ``angle`` about its own third axis.
        """

        return self._derive(_product(self._m, rot_z(angle)))

    def omega(self, reference: 'Basis | None' = None) -> Tensor:
        r"""
        Returns the angular velocity of this basis with respect to ``reference``.

        The absolute angular velocity is computed from the time derivatives of the unit vectors:

        .. math::
            \boldsymbol{\omega} = (\hat{\mathbf{k}}\cdot\dot{\hat{\mathbf{j}}})\hat{\mathbf{i}} +
            (\hat{\mathbf{i}}\cdot\dot{\hat{\mathbf{k}}})\hat{\mathbf{j}} +
            (\hat{\mathbf{j}}\cdot\dot{\hat{\mathbf{i}}})\hat{\mathbf{k}}

        and the angular velocity of ``reference`` is subtracted if it is given.  This is only meaningful for bases
        whose matrix is a symbolic function of :data:`.TIME`; a numeric basis has zero angular velocity.

        :param reference: The basis to measure the angular velocity against (canonical if ``None``)
        :return: The angular velocity vector
        """

        i, j, k = self.i(), self.j(), self.k()

        omega = Tensor([k @ j.dt(), i @ k.dt(), j @ i.dt()], self)

        if reference is not None:
            omega = omega - reference.omega()

        return Tensor(self._tidy(omega.components()))

    def alpha(self, reference: 'Basis | None' = None) -> Tensor:
        r"""
        Returns the angular acceleration of this basis with respect to ``reference``.

        With a reference the transport theorem is applied:

        .. math::
            \boldsymbol{\alpha}_{B/B_1} = \dot{\boldsymbol{\omega}}_B - \boldsymbol{\alpha}_{B_1} -
            \boldsymbol{\omega}_{B_1}\times\boldsymbol{\omega}_B

        :param reference: The basis to measure the angular acceleration against (canonical if ``None``)
        :return: The angular acceleration vector
        """

        omega = self.omega()

        alpha = omega.dt()

        if reference is not None:
            alpha = alpha - reference.alpha() - reference.omega().cross(omega)

        return Tensor(self._tidy(alpha.components()))

    def subs(self, variables: Any, values: Any = None) -> Self:
        """
        Substitutes values for symbolic unknowns in the matrix.

        ``variables`` can be a single symbol, a sequence of symbols paired with a sequence of ``values``, or a
        mapping.  If every symbol is resolved the new basis is numeric, otherwise a warning is issued.

        :param variables: The unknowns to replace
        :param values: The values to replace them with
        :return: The new basis
        """

        out = self._derive(substitute(self._m, variables, values))

        if is_symbolic(out._m):
            warnings.warn(f'The basis still depends on {free_symbols(out._m)} after substitution')

        return out

    def simplified(self) -> Self:
        """
        Returns a copy with every symbolic element of the matrix simplified, regardless of the ``simplify`` option.
        """

        out = copy.copy(self)
        out._m = simplify_array(self._m)

        return out

    def isunitary(self) -> bool:
        """
        Checks that ``m.T @ m`` is the identity.

        Numeric matrices are checked against :attr:`orthonormality_tolerance`.  Symbolic matrices pass only if every
        element provably simplifies to the identity.
        """

        residual = self._m.T @ self._m - np.eye(3, dtype=int)

        return all(is_null(element, self.orthonormality_tolerance) for element in residual.flat)

    def isrighthanded(self) -> bool:
        """
        Checks that the determinant of the matrix is positive.  Symbolic determinants that cannot be proven positive
        are treated as not right handed.
        """

        det = determinant(self._m)

        if is_symbolic(det):
            return bool(sympy.simplify(det).is_positive)

        return det > 0

    def __eq__(self, other: Any) -> bool:

        if not isinstance(other, Basis):
            try:
                other = Basis(other)
            except (ValueError, TypeError):
                return False

        return self._equal_matrix(other)

    __hash__ = None

    def _equal_matrix(self, other: 'Basis') -> bool:
        return all_close(self._m, other._m, self.equality_eps_factor)

    def compose(self, other: 'Basis') -> Self:
        """
        Returns the composition ``m1 @ m2``: ``other`` interpreted relative to this basis.

        :param other: The basis applied second
        :return: The composed basis
        """

        return self._derive(_product(self._m, other.m))

    def __mul__(self, other: Any) -> Self:

        if isinstance(other, Basis):
            return self.compose(other)

        return NotImplemented

    def divide_right(self, other: 'Basis') -> Self:
        r"""
        Returns the basis with matrix :math:`\mathbf{X}` solving :math:`\mathbf{X}\mathbf{m}_2=\mathbf{m}_1`.

        :param other: The basis on the right (``m2``)
        :return: The quotient
        """

        return self._derive(solve(other.m.T, self._m.T).T)

    def __truediv__(self, other: Any) -> Self:

        if isinstance(other, Basis):
            return self.divide_right(other)

        return NotImplemented

    def divide_left(self, other: 'Basis') -> Self:
        r"""
        Returns the basis with matrix :math:`\mathbf{X}` solving :math:`\mathbf{m}_1\mathbf{X}=\mathbf{m}_2`.

        This is the relative matrix of ``other`` with respect to this basis.

        :param other: The basis on the right of the equation (``m2``)
        :return: The quotient
        """

        return self._derive(solve(self._m, other.m))

    def __repr__(self) -> str:
        return '{}({!r})'.format(type(self).__name__, self._m)

    def __str__(self) -> str:
        return str(self._m)


CANONICAL_BASIS: Basis = Basis()
"""
The canonical (identity) basis
"""
