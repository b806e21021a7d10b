# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This module provides :class:`Tensor`, the rank 0, 1, and 2 value type used for scalars, vectors, and second order
tensors throughout rigidkit, along with the usual vector algebra helpers.

A tensor is created from its components relative to a basis (the canonical basis if none is given) and stores them in
canonical coordinates.  For a basis with matrix :math:`\mathbf{m}`:

* vectors: :math:`\mathbf{c}_0 = \mathbf{m}\mathbf{c}`
* second order tensors: :math:`\mathbf{C}_0 = \mathbf{m}\mathbf{C}\mathbf{m}^T`

so the components with respect to any other basis can be recovered with :meth:`Tensor.components`.  The components can
be floats or sympy expressions.  Time derivatives (:meth:`Tensor.dt`) are only meaningful for symbolic components that
depend on :data:`.TIME`; numeric components are constant.

Any object with an ``m`` attribute holding its 3x3 matrix (a :class:`.Basis`, :class:`.Frame` or :class:`.RigidBody`)
can be used as the basis.
"""

from typing import Any

import numpy as np

from rigidkit._algebra import (TIME, as_array, exact_operands, is_symbolic, simplify, substitute, differentiate,
                               vector_norm, all_close, is_null, atan2)
from rigidkit._typing import MATRIX, SCALAR
from rigidkit.errors import DegenerateRepresentation, ShapeMismatch


__all__ = ['Tensor', 'dot', 'cross', 'norm', 'product', 'angle']


DEFAULT_EPS_FACTOR: float = 100.0
"""
The multiple of machine epsilon tolerated when comparing numeric tensors
"""

DEFAULT_NULL_TOLERANCE: float = 1e-10
"""
The norm below which a numeric vector cannot be normalized
"""


class Tensor:
    """
    A rank 0, 1, or 2 tensor in 3 dimensional space with numeric or symbolic components.

    Tensors are immutable values; every operation returns a new tensor.  The supported algebra is

    * ``+`` and ``-`` between tensors of the same rank,
    * ``*`` and ``/`` by scalars (including rank 0 tensors),
    * ``@`` for contraction (``vector @ vector`` is the dot product and returns a plain scalar, ``tensor @ vector`` a
      vector, ``tensor @ tensor`` a tensor),
    * :meth:`cross`, :meth:`product` (outer product), :meth:`norm`, :meth:`dir` and :meth:`dt`.
    """

    __array_ufunc__ = None
    """
    Makes numpy defer to the reflected operators of this class, so ``array * tensor`` works
    """

    def __init__(self, components: Any = 0, basis: Any = None):
        """
        :param components: The components relative to ``basis``.  May also be another :class:`Tensor`, in which
                           case its canonical components are reinterpreted relative to ``basis``.
        :param basis: The basis the components are expressed in.  ``None`` is the canonical basis.
        :raises ShapeMismatch: If the components are not a scalar, a 3 vector, or a 3x3 matrix
        """

        if isinstance(components, Tensor):
            components = components._components

        array = np.squeeze(as_array(components))

        if array.ndim > 2:
            raise ShapeMismatch('Cannot take tensors of order higher than 2 as inputs')

        if any(length != 3 for length in array.shape):
            raise ShapeMismatch('Tensor components must have 3 entries per axis, got shape {}'.format(array.shape))

        if basis is not None:
            matrix, array = exact_operands(basis.m, array)

            if array.ndim == 1:
                array = matrix @ array

            elif array.ndim == 2:
                array = matrix @ array @ matrix.T

        self._components: MATRIX = as_array(array)

    @property
    def ndims(self) -> int:
        """
        The rank of the tensor (0 scalar, 1 vector, 2 second order tensor)
        """

        return self._components.ndim

    @property
    def is_symbolic(self) -> bool:
        """
        Whether the components hold sympy expressions
        """

        return is_symbolic(self._components)

    def components(self, basis: Any = None) -> MATRIX | SCALAR:
        """
        Returns the components of the tensor relative to ``basis`` (canonical if ``None``).

        Scalars are returned as a plain float or sympy expression.

        :param basis: The basis to express the components in
        :return: The components
        """

        array = self._components

        if basis is not None:
            matrix, array = exact_operands(basis.m, array)

            if self.ndims == 1:
                array = matrix.T @ array

            elif self.ndims == 2:
                array = matrix.T @ array @ matrix

        array = as_array(array)

        if self.ndims == 0:
            return array[()]

        return array

    def component(self, index: int, basis: Any = None) -> SCALAR | MATRIX:
        """
        Returns a single (zero based) component relative to ``basis``.

        :param index: The component index
        :param basis: The basis to express the component in
        :return: The requested component
        """

        return self.components(basis)[index]

    def _scalar(self) -> SCALAR:
        return self._components[()]

    def __add__(self, other: Any) -> 'Tensor':
        other = _coerce(other)

        if other.ndims != self.ndims:
            raise ShapeMismatch('Cannot add tensors of rank {} and {}'.format(self.ndims, other.ndims))

        a, b = exact_operands(self._components, other._components)

        return Tensor(a + b)

    def __radd__(self, other: Any) -> 'Tensor':
        return self.__add__(other)

    def __sub__(self, other: Any) -> 'Tensor':
        return self.__add__(-_coerce(other))

    def __rsub__(self, other: Any) -> 'Tensor':
        return _coerce(other).__add__(-self)

    def __neg__(self) -> 'Tensor':
        return Tensor(-self._components)

    def __mul__(self, other: Any) -> 'Tensor':

        if isinstance(other, Tensor):

            if other.ndims == 0:
                return Tensor(_scaled(self._components, other._scalar()))

            if self.ndims == 0:
                return Tensor(_scaled(other._components, self._scalar()))

            raise ShapeMismatch('Tensors of rank {} and {} cannot be multiplied.  '
                                'Use @ for contraction or product for the outer product'.format(self.ndims,
                                                                                                other.ndims))

        scalar = as_array(other)

        if scalar.ndim:
            raise ShapeMismatch('Tensors can only be multiplied by scalars.  Use @ for contraction')

        return Tensor(_scaled(self._components, scalar[()]))

    def __rmul__(self, other: Any) -> 'Tensor':
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> 'Tensor':

        if isinstance(other, Tensor):
            if other.ndims:
                raise ShapeMismatch('Tensors can only be divided by scalars')
            other = other._scalar()

        scalar = as_array(other)

        if scalar.ndim:
            raise ShapeMismatch('Tensors can only be divided by scalars')

        components, scalar = exact_operands(self._components, scalar[()])

        return Tensor(components / scalar)

    def __matmul__(self, other: Any) -> 'Tensor | SCALAR':
        other = _coerce(other)

        if self.ndims == 0 or other.ndims == 0:
            raise ShapeMismatch('Cannot contract a scalar.  Use * instead')

        a, b = exact_operands(self._components, other._components)

        result = a @ b

        if np.ndim(result) == 0:
            return as_array(result)[()]

        return Tensor(result)

    def __rmatmul__(self, other: Any) -> 'Tensor | SCALAR':
        return _coerce(other).__matmul__(self)

    def __eq__(self, other: Any) -> bool:

        if not isinstance(other, Tensor):
            try:
                other = Tensor(other)
            except (ValueError, TypeError):
                return False

        if other.ndims != self.ndims:
            return False

        return all_close(self._components, other._components, DEFAULT_EPS_FACTOR)

    __hash__ = None

    def dot(self, other: Any) -> SCALAR:
        """
        The dot product of two vectors.
        """

        return self @ other

    def cross(self, other: Any) -> 'Tensor':
        """
        The cross product ``self x other`` of two vectors.

        :raises ShapeMismatch: If either tensor is not a vector
        """

        other = _coerce(other)

        if self.ndims != 1 or other.ndims != 1:
            raise ShapeMismatch('The cross product is only defined for vectors')

        a, b = exact_operands(self._components, other._components)

        return Tensor([a[1]*b[2] - a[2]*b[1],
                       a[2]*b[0] - a[0]*b[2],
                       a[0]*b[1] - a[1]*b[0]])

    def product(self, other: Any) -> 'Tensor':
        """
        The outer (tensor) product of two vectors, a second order tensor.
        """

        other = _coerce(other)

        if self.ndims != 1 or other.ndims != 1:
            raise ShapeMismatch('The outer product is only defined for vectors')

        a, b = exact_operands(self._components, other._components)

        return Tensor(a[:, None] * b[None, :])

    def norm(self) -> SCALAR:
        """
        The euclidean norm (Frobenius norm for second order tensors, absolute value for scalars).
        """

        return vector_norm(self._components)

    def dir(self, tolerance: float = DEFAULT_NULL_TOLERANCE) -> 'Tensor':
        """
        Returns the unit tensor in the direction of this one.

        :param tolerance: The norm at or below which a numeric tensor is considered null
        :raises DegenerateRepresentation: If the tensor is null
        """

        length = self.norm()

        if is_null(length, tolerance):
            raise DegenerateRepresentation('Cannot normalize a null vector')

        return self / length

    def dt(self, basis: Any = None) -> 'Tensor':
        """
        The time derivative of the tensor as seen from ``basis`` (canonical if ``None``).

        The components relative to ``basis`` are differentiated with respect to :data:`.TIME` and the result is
        interpreted relative to the same basis.  Numeric components have a zero derivative.

        :param basis: The basis in which the derivative is taken
        :return: The derivative
        """

        return Tensor(differentiate(self.components(basis), TIME), basis)

    def subs(self, variables: Any, values: Any = None) -> 'Tensor':
        """
        Substitutes values for symbolic unknowns in the components.  Fully resolved tensors become numeric.

        See :func:`.substitute` for the accepted forms of ``variables`` and ``values``.
        """

        return Tensor(substitute(self._components, variables, values))

    def simplify(self) -> 'Tensor':
        """
        Returns the tensor with every symbolic component simplified.
        """

        return Tensor(simplify(self._components))

    def __repr__(self) -> str:
        return 'Tensor({!r})'.format(self.components())

    def __str__(self) -> str:
        return str(self.components())


def _scaled(components: MATRIX, scalar: SCALAR) -> MATRIX:
    components, scalar = exact_operands(components, scalar)

    return components * scalar


def _coerce(value: Any) -> Tensor:
    return value if isinstance(value, Tensor) else Tensor(value)


def dot(a: Any, b: Any) -> SCALAR:
    """
    The dot product of two vectors (tensors or canonical component arrays).
    """

    return _coerce(a).dot(b)


def cross(a: Any, b: Any) -> Tensor:
    """
    The cross product ``a x b`` of two vectors (tensors or canonical component arrays).
    """

    return _coerce(a).cross(b)


def norm(a: Any) -> SCALAR:
    """
    The norm of a tensor (or canonical component array).
    """

    return _coerce(a).norm()


def product(a: Any, b: Any) -> Tensor:
    """
    The outer product of two vectors (tensors or canonical component arrays).
    """

    return _coerce(a).product(b)


def angle(a: Any, b: Any, normal: Any = None) -> SCALAR:
    """
    The angle between two vectors.

    Without ``normal`` the unsigned angle in [0, pi] is returned.  With ``normal`` the angle is measured from ``a`` to
    ``b`` and is positive for right handed rotations about ``normal``, in (-pi, pi].

    :param a: The first vector
    :param b: The second vector
    :param normal: The optional vector defining the positive sense of rotation
    :return: The angle in radians
    """

    a = _coerce(a)
    b = _coerce(b)

    normal_to_both = a.cross(b)

    if normal is None:
        return atan2(normal_to_both.norm(), a @ b)

    return atan2(normal_to_both @ _coerce(normal).dir(), a @ b)
