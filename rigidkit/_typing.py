from typing import Union, Protocol, Sequence, Any, runtime_checkable

import numpy as np
import numpy.typing as npt

import sympy

DOUBLE_ARRAY = np.typing.NDArray[np.float64]
OBJECT_ARRAY = np.typing.NDArray[np.object_]
ARRAY_LIKE = npt.ArrayLike

SCALAR = Union[float, sympy.Expr]
"""
A numeric or symbolic scalar
"""

MATRIX = Union[DOUBLE_ARRAY, OBJECT_ARRAY]
"""
A float64 array for numeric content or an object array of sympy expressions for symbolic content
"""

EULER_ORDER = Union[str, Sequence[int]]
"""
An intrinsic Euler sequence given either as axis indices (``[3, 1, 3]``) or axis letters (``'zxz'``)
"""


@runtime_checkable
class Geometry(Protocol):
    """
    An opaque triangulated surface attached to a rigid body for rendering purposes.

    Anything with ``vertices`` (nx3) and ``faces`` (mx3 vertex indices) attributes qualifies.
    """

    vertices: Any
    faces: Any
