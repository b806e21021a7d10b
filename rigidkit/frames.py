# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This module provides the translational collaborators of rigidkit: :class:`Point`, :class:`Particle` and
:class:`Frame`.

Positions are given by their components relative to a reference frame (the canonical frame if none is given) and are
stored as absolute :class:`.Tensor` vectors:

.. math::
    \mathbf{r} = \mathbf{r}_{ref} + \mathbf{m}_{ref}\mathbf{r}_{given}

A :class:`Frame` is a :class:`Point` (its origin) together with a :class:`.Basis` (its orientation), so every
:class:`.Basis` operation is available on frames as well.  Velocities and accelerations are only meaningful for
positions that are symbolic functions of :data:`.TIME`.
"""

import copy

from typing import Any, Self

import numpy as np

from rigidkit._typing import ARRAY_LIKE, SCALAR
from rigidkit.errors import ShapeMismatch
from rigidkit.rotations.basis import Basis, BasisOptions, _absolute_matrix
from rigidkit.tensors import Tensor
from rigidkit.utilities.mixin_classes import AttributePrinting


__all__ = ['Point', 'Particle', 'Frame', 'CANONICAL_FRAME']


def _absolute_position(position: Any, reference: 'Frame | None') -> Tensor:
    """
    Converts position components relative to ``reference`` into the absolute position vector.

    Tensors are reinterpreted, so their canonical components are taken as components relative to ``reference``.
    """

    if position is None:
        position = [0, 0, 0]

    if reference is None:
        relative = Tensor(position)
    else:
        relative = Tensor(position, reference)

    if relative.ndims != 1:
        raise ShapeMismatch('A position must be a vector')

    if reference is None:
        return relative

    return reference.r + relative


class Point(AttributePrinting):
    """
    A point in space, described by its position vector :attr:`r`.
    """

    printed_attributes = ('r',)

    def __init__(self, position: ARRAY_LIKE | Tensor | None = None, reference: 'Frame | None' = None):
        """
        :param position: The position components relative to ``reference`` (the origin if ``None``)
        :param reference: The frame the position is given in (canonical if ``None``)
        :raises ShapeMismatch: If the position is not a vector
        """

        self._r: Tensor = _absolute_position(position, reference)

    @property
    def r(self) -> Tensor:
        """
        The absolute position vector
        """

        return self._r

    def vel(self, frame: 'Frame | None' = None) -> Tensor:
        """
        The velocity of the point as seen from ``frame``.

        :param frame: The frame the velocity is observed in (canonical if ``None``)
        :return: The velocity vector
        """

        if frame is None:
            return self._r.dt()

        return (self._r - frame.r).dt(frame)

    def accel(self, frame: 'Frame | None' = None) -> Tensor:
        """
        The acceleration of the point as seen from ``frame``.

        :param frame: The frame the acceleration is observed in (canonical if ``None``)
        :return: The acceleration vector
        """

        if frame is None:
            return self._r.dt().dt()

        return self.vel(frame).dt(frame)

    def subs(self, variables: Any, values: Any = None) -> Self:
        """
        Substitutes values for symbolic unknowns in the position.
        """

        out = copy.copy(self)
        out._r = self._r.subs(variables, values)

        return out

    def __eq__(self, other: Any) -> bool:

        if not isinstance(other, Point):
            return NotImplemented

        return self._r == other._r


class Particle(Point):
    """
    A point with a (scalar) mass.
    """

    printed_attributes = ('mass', 'r')

    def __init__(self, mass: SCALAR | Tensor = 1, position: ARRAY_LIKE | Tensor | None = None,
                 reference: 'Frame | None' = None):
        """
        :param mass: The mass of the particle
        :param position: The position components relative to ``reference`` (the origin if ``None``)
        :param reference: The frame the position is given in (canonical if ``None``)
        :raises ShapeMismatch: If the mass is not a scalar or the position not a vector
        """

        super().__init__(position, reference)

        self._mass: Tensor = _scalar_tensor(mass)

    @property
    def mass(self) -> Tensor:
        """
        The mass as a rank 0 tensor
        """

        return self._mass

    def p(self, frame: 'Frame | None' = None) -> Tensor:
        """
        The linear momentum of the particle as seen from ``frame`` (canonical if ``None``).
        """

        return self._mass * self.vel(frame)

    def subs(self, variables: Any, values: Any = None) -> Self:
        out = super().subs(variables, values)
        out._mass = self._mass.subs(variables, values)

        return out

    def __eq__(self, other: Any) -> bool:

        if not isinstance(other, Particle):
            return NotImplemented

        return super().__eq__(other) and self._mass == other._mass


def _scalar_tensor(value: Any) -> Tensor:
    tensor = Tensor(value)

    if tensor.ndims != 0:
        raise ShapeMismatch('Mass must be a scalar')

    return tensor


class Frame(Point, Basis):
    """
    A reference frame: an origin (:attr:`r`) and an orientation (:attr:`m`).

    All of the :class:`.Basis` operations apply to the orientation, and the :class:`.Point` operations to the
    origin.  A frame can be used as the reference of any :class:`.Tensor`, :class:`.Point` or :class:`.Basis`.
    """

    printed_attributes = ('r', 'm')

    def __init__(self, position: ARRAY_LIKE | Tensor | None = None, basis: Any = None,
                 reference: 'Frame | None' = None, options: BasisOptions | None = None):
        """
        :param position: The origin components relative to ``reference`` (the origin of ``reference`` if ``None``)
        :param basis: The orientation relative to ``reference``: anything accepted as the single argument of
                      :class:`.Basis` (aligned with ``reference`` if ``None``)
        :param reference: The frame position and orientation are relative to (canonical if ``None``)
        :param options: The options to configure the orientation with
        """

        Basis.__init__(self, options=options)
        Point.__init__(self, position, reference)

        relative = np.eye(3) if basis is None else Basis(basis).m

        self._store(_absolute_matrix(relative, reference))

    def subs(self, variables: Any, values: Any = None) -> Self:
        """
        Substitutes values for symbolic unknowns in the origin and the orientation.
        """

        out = Basis.subs(self, variables, values)
        out._r = self._r.subs(variables, values)

        return out

    def __eq__(self, other: Any) -> bool:

        if not isinstance(other, Frame):
            return NotImplemented

        return self._r == other._r and self._equal_matrix(other)

    __hash__ = None


CANONICAL_FRAME: Frame = Frame()
"""
The canonical frame: the origin with the canonical basis
"""
