# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This module provides the :class:`RigidBody` class, the dynamics layer of rigidkit.

A rigid body is a :class:`.Frame` (the center of mass and the body fixed basis) with a mass, an inertia tensor about
the center of mass (:attr:`RigidBody.IG`, stored in the canonical basis) and an optional geometry used only for
rendering.  From these it derives

* the linear momentum :math:`\mathbf{p}=m\mathbf{v}_G` (:meth:`RigidBody.p`),
* the angular momentum :math:`\mathbf{H}_O=(\mathbf{r}_G-\mathbf{r}_O)\times\mathbf{p}+\mathbf{I}_G\boldsymbol{\omega}`
  (:meth:`RigidBody.H`),
* the kinetic energy :math:`T=\frac{1}{2}m|\mathbf{v}_G|^2+\frac{1}{2}\boldsymbol{\omega}\cdot\mathbf{I}_G
  \boldsymbol{\omega}` (:meth:`RigidBody.T`),
* the inertia tensor about any point through the parallel axis theorem (:meth:`RigidBody.I`),
* and the Newton-Euler equations of motion (:meth:`RigidBody.force_equation`, :meth:`RigidBody.torque_equation` and
  :meth:`RigidBody.equations`).

The equations of motion are only meaningful for bodies whose state is a symbolic function of :data:`.TIME`.

Example::

    >>> import sympy
    >>> from rigidkit import RigidBody, Basis, TIME
    >>> theta = sympy.Function('theta')(TIME)
    >>> body = RigidBody.box(12, [0, 0, 0], Basis([0, 0, 1], theta), 1, 2, 3)
    >>> sympy.simplify(body.T().components())
    5*Derivative(theta(t), t)**2/2
"""

import logging

from typing import Any, Self

import numpy as np

import sympy

from rigidkit._algebra import as_array, is_symbolic
from rigidkit._typing import ARRAY_LIKE, SCALAR, Geometry
from rigidkit.errors import InvalidArguments, ShapeMismatch, UnsupportedOperation
from rigidkit.frames import Point, Particle, Frame, CANONICAL_FRAME, _absolute_position, _scalar_tensor
from rigidkit.rotations.basis import Basis, BasisOptions
from rigidkit.tensors import Tensor


__all__ = ['RigidBody']


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
This is the logging interface for reporting status, results, issues, and other information.
"""


def _inertia_tensor(value: Any, reference: Frame | None = None) -> Tensor:
    tensor = Tensor(value, reference)

    if tensor.ndims != 2:
        raise ShapeMismatch('The inertia tensor must be given as a 3x3 matrix')

    return tensor


class RigidBody(Frame):
    """
    A rigid body with a mass, an inertia tensor about its center of mass, and an orientation.

    The constructor accepts any number of items, applied in order so that later items override the fields set by
    earlier ones.  If the last of several items is a :class:`.Frame`, or if ``reference`` is given, every item is
    relative to that frame.

    =======================================  ==================================================================
    Item                                     Fields set
    =======================================  ==================================================================
    :class:`RigidBody`                       mass, inertia, position, orientation and geometry
    :class:`.Particle`                       mass and position
    :class:`.Frame`                          position and orientation
    :class:`.Point`                          position
    :class:`.Basis`                          orientation
    geometry (``vertices`` and ``faces``)    geometry
    scalar (or rank 0 :class:`.Tensor`)      mass
    3 vector (or rank 1 :class:`.Tensor`)    position
    3x3 matrix (or rank 2 :class:`.Tensor`)  inertia about the center of mass
    =======================================  ==================================================================

    Positions compose as :math:`\\mathbf{r}_{ref}+\\mathbf{m}_{ref}\\mathbf{r}` and inertia tensors as
    :math:`\\mathbf{m}_{ref}\\mathbf{I}\\mathbf{m}_{ref}^T`.  Orientations are the matrix of the item relative to
    the reference, :math:`\\mathbf{m}_{ref}^T\\mathbf{m}` (see :meth:`.Basis.matrix`).
    Without any items the body has unit mass, identity inertia, sits at the origin of the reference aligned with it,
    and has no geometry.
    """

    printed_attributes = ('mass', 'IG', 'r', 'm')

    def __init__(self, *items: Any, reference: Frame | None = None, options: BasisOptions | None = None):
        """
        :param items: The items describing the body, see the class documentation
        :param reference: The frame the items are relative to (canonical if ``None``)
        :param options: The options to configure the orientation with
        :raises InvalidArguments: If an item cannot be interpreted
        :raises ShapeMismatch: If an item has a rank above 2
        """

        if reference is None and len(items) > 1 and isinstance(items[-1], Frame):
            reference = items[-1]
            items = items[:-1]

        super().__init__(reference=reference, options=options)

        self._mass: Tensor = Tensor(1)
        """
        The mass of the body
        """

        self._IG: Tensor = Tensor(np.eye(3))
        """
        The inertia tensor about the center of mass in the canonical basis
        """

        self._geometry: Geometry | None = None
        """
        The surface of the body, for rendering only
        """

        for item in items:
            self._absorb(item, reference)

    def _absorb(self, item: Any, reference: Frame | None) -> None:
        """
        Applies a single constructor item relative to ``reference``.
        """

        _LOGGER.debug(f'Applying a {type(item).__name__} to the rigid body')

        if isinstance(item, RigidBody):
            self._mass = item.mass
            self._IG = _inertia_tensor(item.IG, reference)
            self._r = _absolute_position(item.r, reference)
            self._store(self._relative_orientation(item, reference))
            self._geometry = item.geometry

        elif isinstance(item, Particle):
            self._mass = item.mass
            self._r = _absolute_position(item.r, reference)

        elif isinstance(item, Frame):
            self._r = _absolute_position(item.r, reference)
            self._store(self._relative_orientation(item, reference))

        elif isinstance(item, Point):
            self._r = _absolute_position(item.r, reference)

        elif isinstance(item, Basis):
            self._store(self._relative_orientation(item, reference))

        elif isinstance(item, Geometry):
            self._geometry = item

        else:
            try:
                tensor = item if isinstance(item, Tensor) else Tensor(item)
            except ShapeMismatch:
                raise
            except (ValueError, TypeError) as err:
                raise InvalidArguments(f'Cannot interpret an item of type {type(item).__name__} '
                                       f'for a rigid body') from err

            if tensor.ndims == 0:
                self._mass = tensor

            elif tensor.ndims == 1:
                self._r = _absolute_position(tensor, reference)

            else:
                self._IG = _inertia_tensor(tensor, reference)

    @staticmethod
    def _relative_orientation(item: Basis, reference: Frame | None) -> Any:
        if reference is None:
            return item.m

        return item.matrix(reference)

    @property
    def mass(self) -> Tensor:
        """
        The mass as a rank 0 tensor
        """

        return self._mass

    @property
    def IG(self) -> Tensor:
        """
        The inertia tensor about the center of mass, stored in the canonical basis
        """

        return self._IG

    @property
    def geometry(self) -> Geometry | None:
        """
        The opaque surface of the body (anything with ``vertices`` and ``faces``), or ``None``
        """

        return self._geometry

    @property
    def is_symbolic(self) -> bool:
        """
        Whether any part of the state (mass, inertia, position, orientation) holds sympy expressions
        """

        return (Basis.is_symbolic.fget(self) or self._r.is_symbolic or self._mass.is_symbolic or
                self._IG.is_symbolic)

    def p(self, frame: Frame | None = None) -> Tensor:
        """
        The linear momentum of the body as seen from ``frame`` (canonical if ``None``).
        """

        return self._mass * self.vel(frame)

    def H(self, point: Point | None = None, frame: Frame | None = None) -> Tensor:
        """
        The angular momentum of the body about ``point`` as seen from ``frame``.

        :param point: The point to take moments about (the origin if ``None``)
        :param frame: The frame the motion is observed in (canonical if ``None``)
        :return: The angular momentum vector
        """

        if frame is None:
            frame = CANONICAL_FRAME

        lever = self._r if point is None else self._r - point.r

        return lever.cross(self.p(frame)) + self._IG @ self.omega(frame)

    def T(self, frame: Frame | None = None) -> Tensor:
        """
        The kinetic energy of the body as seen from ``frame`` (canonical if ``None``), as a rank 0 tensor.
        """

        if frame is None:
            frame = CANONICAL_FRAME

        velocity = self.vel(frame)
        omega = self.omega(frame)

        return self._mass * (velocity @ velocity) / 2 + Tensor(omega @ (self._IG @ omega)) / 2

    def I(self, point: Point | None = None) -> Tensor:
        r"""
        The inertia tensor of the body about ``point`` in the canonical basis (parallel axis theorem):

        .. math::
            \mathbf{I}_O = \mathbf{I}_G + m\left(|\mathbf{d}|^2\mathbf{1} - \mathbf{d}\otimes\mathbf{d}\right)

        where :math:`\mathbf{d}` is the position of the center of mass relative to the point.

        :param point: The point (the origin if ``None``)
        :return: The inertia tensor about the point
        """

        offset = self._r if point is None else self._r - point.r

        return self._IG + self._mass * (Tensor(np.eye(3)) * (offset @ offset) - offset.product(offset))

    def subs(self, variables: Any, values: Any = None) -> Self:
        """
        Substitutes values for symbolic unknowns in the mass, inertia, position and orientation.

        Fully resolved values become numeric.
        """

        out = super().subs(variables, values)
        out._mass = self._mass.subs(variables, values)
        out._IG = self._IG.subs(variables, values)

        return out

    def _require_symbolic(self, *others: Any) -> None:

        if self.is_symbolic:
            return

        for other in others:
            state = other.r if isinstance(other, Point) else other

            if isinstance(state, Tensor) and state.is_symbolic:
                return

            if not isinstance(state, Tensor) and is_symbolic(state):
                return

        raise UnsupportedOperation('The equations of motion require a body (or loads) depending symbolically on '
                                   'time')

    def _equation(self, value: Any) -> sympy.Expr:
        expression = sympy.sympify(value)

        if self.simplify:
            return sympy.simplify(expression)

        return expression

    def force_equation(self, force: ARRAY_LIKE | Tensor, direction: ARRAY_LIKE | Tensor,
                       frame: Frame | None = None) -> sympy.Expr:
        r"""
        Returns the projection of Newton's law on ``direction``, as an expression equal to zero:

        .. math::
            \frac{d\mathbf{p}}{dt}\cdot\mathbf{e} - \mathbf{F}\cdot\mathbf{e}

        :param force: The total external force
        :param direction: The direction to project along
        :param frame: The inertial frame the motion is observed in (canonical if ``None``)
        :return: The scalar equation
        :raises UnsupportedOperation: If neither the body nor the force is symbolic
        """

        force = Tensor(force)
        direction = Tensor(direction)

        self._require_symbolic(force)

        if frame is None:
            frame = CANONICAL_FRAME

        return self._equation(self.p(frame).dt(frame) @ direction - force @ direction)

    def torque_equation(self, point: Point, torque: ARRAY_LIKE | Tensor, direction: ARRAY_LIKE | Tensor,
                        frame: Frame | None = None) -> sympy.Expr:
        r"""
        Returns the projection of the angular momentum law about ``point`` on ``direction``, as an expression equal
        to zero:

        .. math::
            \frac{d\mathbf{H}_A}{dt}\cdot\mathbf{e} - (\mathbf{M}_A - \mathbf{v}_A\times\mathbf{p})\cdot\mathbf{e}

        :param point: The point the moments are taken about (it may move)
        :param torque: The total external moment about ``point``
        :param direction: The direction to project along
        :param frame: The inertial frame the motion is observed in (canonical if ``None``)
        :return: The scalar equation
        :raises UnsupportedOperation: If neither the body, the point nor the torque is symbolic
        """

        torque = Tensor(torque)
        direction = Tensor(direction)

        self._require_symbolic(point, torque)

        if frame is None:
            frame = CANONICAL_FRAME

        momentum = self.p(frame)

        lhs = self.H(point, frame).dt(frame) @ direction
        rhs = (torque - point.vel(frame).cross(momentum)) @ direction

        return self._equation(lhs - rhs)

    def equations(self, force: ARRAY_LIKE | Tensor, point: Point, torque: ARRAY_LIKE | Tensor,
                  frame: Frame | None = None) -> list[sympy.Expr]:
        """
        Returns the six Newton-Euler equations of the body projected on the canonical axes: three force equations
        followed by three torque equations about ``point``.

        :param force: The total external force
        :param point: The point the moments are taken about
        :param torque: The total external moment about ``point``
        :param frame: The inertial frame the motion is observed in (canonical if ``None``)
        :return: The six expressions equal to zero
        :raises UnsupportedOperation: If neither the body nor the loads are symbolic
        """

        force = Tensor(force)
        torque = Tensor(torque)

        self._require_symbolic(force, point, torque)

        if frame is None:
            frame = CANONICAL_FRAME

        momentum = self.p(frame)

        translation = momentum.dt(frame) - force
        rotation = self.H(point, frame).dt(frame) + point.vel(frame).cross(momentum) - torque

        return [self._equation(value) for value in list(translation.components()) + list(rotation.components())]

    @classmethod
    def _primitive(cls, mass: SCALAR, position: Any, basis: Any, principal: list,
                   geometry: Geometry | None, options: BasisOptions | None) -> Self:
        """
        Builds a body whose inertia about the center of mass is diagonal in the body basis.

        ``principal`` holds the principal moments divided by the mass.
        """

        body = cls(Frame(position, basis), options=options)
        body._mass = _scalar_tensor(mass)

        scale = body._mass.components()

        body._IG = _inertia_tensor(np.diag(as_array([scale * moment for moment in principal])), body)
        body._geometry = geometry

        return body

    @classmethod
    def box(cls, mass: SCALAR = 1, position: Any = None, basis: Any = None, lx: SCALAR = 1, ly: SCALAR = 1,
            lz: SCALAR = 1, geometry: Geometry | None = None, options: BasisOptions | None = None) -> Self:
        r"""
        Creates a homogeneous rectangular box centered at ``position`` with edges along the body axes.

        .. math::
            \mathbf{I}_G = \frac{m}{12}\text{diag}(l_y^2+l_z^2, l_x^2+l_z^2, l_x^2+l_y^2)

        :param mass: The mass of the box
        :param position: The center of the box (the origin if ``None``)
        :param basis: The body basis (canonical if ``None``)
        :param lx: The edge length along the first body axis
        :param ly: The edge length along the second body axis
        :param lz: The edge length along the third body axis
        :param geometry: An optional surface for rendering
        :param options: The options to configure the orientation with
        :return: The box
        """

        return cls._primitive(mass, position, basis,
                              [(ly**2 + lz**2) / 12, (lx**2 + lz**2) / 12, (lx**2 + ly**2) / 12],
                              geometry, options)

    @classmethod
    def sphere(cls, mass: SCALAR = 1, position: Any = None, basis: Any = None, radius: SCALAR = 1,
               geometry: Geometry | None = None, options: BasisOptions | None = None) -> Self:
        """
        Creates a homogeneous solid sphere, with :math:`\\mathbf{I}_G=\\frac{2}{5}mR^2\\mathbf{1}`.
        """

        moment = 2 * radius**2 / 5

        return cls._primitive(mass, position, basis, [moment, moment, moment], geometry, options)

    @classmethod
    def cylinder(cls, mass: SCALAR = 1, position: Any = None, basis: Any = None, radius: SCALAR = 1,
                 lz: SCALAR = 1, geometry: Geometry | None = None, options: BasisOptions | None = None) -> Self:
        r"""
        Creates a homogeneous solid cylinder centered at ``position`` with its axis along the third body axis.

        .. math::
            \mathbf{I}_G = \frac{m}{12}\text{diag}(3R^2+l_z^2, 3R^2+l_z^2, 6R^2)
        """

        lateral = (3 * radius**2 + lz**2) / 12

        return cls._primitive(mass, position, basis, [lateral, lateral, radius**2 / 2], geometry, options)

    @classmethod
    def cone(cls, mass: SCALAR = 1, position: Any = None, basis: Any = None, radius: SCALAR = 1,
             lz: SCALAR = 1, geometry: Geometry | None = None, options: BasisOptions | None = None) -> Self:
        r"""
        Creates a homogeneous solid cone with its center of mass at ``position`` and its axis along the third body
        axis.

        .. math::
            \mathbf{I}_G = \frac{3m}{20}\text{diag}(R^2+l_z^2/4, R^2+l_z^2/4, 2R^2)
        """

        lateral = 3 * (radius**2 + lz**2 / 4) / 20

        return cls._primitive(mass, position, basis, [lateral, lateral, 3 * radius**2 / 10], geometry, options)

    def __eq__(self, other: Any) -> bool:

        if not isinstance(other, RigidBody):
            return NotImplemented

        return super().__eq__(other) and self._mass == other._mass and self._IG == other._IG

    __hash__ = None
