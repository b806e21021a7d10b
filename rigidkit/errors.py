# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module defines the exceptions raised by rigidkit.

All of them derive from the builtin exception that would otherwise have been raised (:class:`ValueError` or
:class:`NotImplementedError`) so existing ``except ValueError`` handlers keep working.
"""


__all__ = ['InvalidArguments', 'DegenerateRepresentation', 'ShapeMismatch', 'UnsupportedOperation']


class InvalidArguments(ValueError):
    """
    Raised when a constructor receives a combination of arguments (arity, element counts, or types) it cannot
    interpret.
    """


class DegenerateRepresentation(ValueError):
    """
    Raised when a rotation representation is requested at a configuration where it is mathematically undefined.

    This happens for the rotation axis at 0 and 180 degrees, for quaternions at 180 degrees, for symmetric Euler
    angles when the middle angle is 0 or 180 degrees, for asymmetric Euler angles when the middle angle is +/-90
    degrees, and whenever a null vector is normalized.  Choose a different representation or reference basis.
    """


class ShapeMismatch(ValueError):
    """
    Raised when a value does not have the shape its role requires (a scalar mass, a 3x3 inertia tensor, a 3x3
    rotation matrix) or when tensors of different rank are combined.
    """


class UnsupportedOperation(NotImplementedError):
    """
    Raised when an operation that needs symbolic, time dependent content is requested for purely numeric content.
    """
