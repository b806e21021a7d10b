# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
rigidkit: rotation representations and rigid body mechanics

The package is built from two layers:

* :mod:`rigidkit.rotations`, the rotation representation engine (:class:`.Basis` and the conversion routines
  between rotation matrices, quaternions, axis/angle pairs, columns and Euler angles), and
* :mod:`rigidkit.body`, the rigid body layer (:class:`.RigidBody`) built on the translational collaborators of
  :mod:`rigidkit.frames` and the :class:`.Tensor` value type of :mod:`rigidkit.tensors`.

Everything accepts floats or sympy expressions.  Time dependent quantities are written as functions of
:data:`TIME`, for instance ``sympy.Function('theta')(TIME)``.
"""

from rigidkit._algebra import TIME
from rigidkit.errors import InvalidArguments, DegenerateRepresentation, ShapeMismatch, UnsupportedOperation
from rigidkit.tensors import Tensor, dot, cross, norm, product, angle
from rigidkit.rotations import Basis, BasisOptions, CANONICAL_BASIS
from rigidkit.frames import Point, Particle, Frame, CANONICAL_FRAME
from rigidkit.body import RigidBody


__version__ = '1.0.0'

__all__ = ['TIME', 'InvalidArguments', 'DegenerateRepresentation', 'ShapeMismatch', 'UnsupportedOperation',
           'Tensor', 'dot', 'cross', 'norm', 'product', 'angle',
           'Basis', 'BasisOptions', 'CANONICAL_BASIS',
           'Point', 'Particle', 'Frame', 'CANONICAL_FRAME',
           'RigidBody']
