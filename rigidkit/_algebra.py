# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module provides the numeric/symbolic array backend used throughout rigidkit.

Numeric content is always stored as a float64 numpy array.  Symbolic content is stored as a numpy array with
``dtype=object`` whose entries are sympy expressions.  Because both are numpy arrays, matrix products, transposes,
slicing and traces are written once and work for either kind of content.  The handful of operations whose meaning
differs between the two (simplification, substitution, differentiation, determinants, linear solves and the
elementary functions) are dispatched here based on :func:`is_symbolic`.

The time variable used for every time derivative in rigidkit is :data:`TIME`.  Time dependent quantities should be
built from it, for instance ``sympy.Function('theta')(TIME)``.
"""

from typing import Any, Callable, Mapping

import numpy as np

import sympy

from rigidkit._typing import ARRAY_LIKE, MATRIX, OBJECT_ARRAY, SCALAR
from rigidkit.errors import InvalidArguments


__all__ = ['TIME', 'EPS', 'is_symbolic', 'as_array', 'exact', 'exact_operands', 'elementwise', 'simplify', 'free_symbols', 'resolve',
           'substitute', 'differentiate', 'determinant', 'solve', 'vector_norm', 'vanishes', 'all_close', 'is_null',
           'clip_unit', 'cos', 'sin', 'sqrt', 'acos', 'asin', 'atan2']


TIME: sympy.Symbol = sympy.Symbol('t')
"""
The independent variable for all time derivatives
"""

EPS: float = float(np.finfo(np.float64).eps)
"""
Machine epsilon for float64
"""


def is_symbolic(value: Any) -> bool:
    """
    Returns ``True`` if value holds sympy content.

    Sympy scalars and matrices are symbolic, as are object arrays and sequences containing at least one sympy
    expression.  Everything else is considered numeric.

    :param value: The value to check
    :return: Whether the value should be treated symbolically
    """

    if isinstance(value, (sympy.Basic, sympy.MatrixBase)):
        return True

    if isinstance(value, np.ndarray):
        return value.dtype == object and any(isinstance(element, sympy.Basic) for element in value.flat)

    if isinstance(value, (list, tuple)):
        return any(is_symbolic(element) for element in value)

    return False


def elementwise(func: Callable[[Any], Any], array: ARRAY_LIKE) -> OBJECT_ARRAY:
    """
    Applies ``func`` to every element of array, returning an object array of the same shape.

    This works for 0 dimensional arrays as well.

    :param func: The function to apply to each element
    :param array: The array to apply the function to
    :return: An object array containing the results
    """

    array = np.asarray(array, dtype=object)

    out = np.empty(array.shape, dtype=object)

    for index in np.ndindex(array.shape):
        out[index] = func(array[index])

    return out


def _exact_number(value: Any) -> sympy.Basic:
    """
    Converts a plain number into an exact sympy number.  Floats become the rational of their decimal representation.
    """

    if isinstance(value, sympy.Basic):
        return value

    value = sympy.sympify(value)

    if isinstance(value, sympy.Float):
        return sympy.nsimplify(value, rational=True)

    return value


def as_array(value: Any) -> MATRIX:
    """
    Converts value into the backend representation.

    Symbolic input becomes an object array of sympy expressions, everything else a float64 array.  Plain numbers
    mixed into symbolic input are stored as exact sympy numbers so that no float coefficients leak into the
    expressions.

    :param value: The scalar, sequence, array, or sympy matrix to convert
    :return: The converted array
    """

    if isinstance(value, sympy.MatrixBase):
        value = value.tolist()

    if is_symbolic(value):
        return elementwise(_exact_number, np.array(value, dtype=object))

    return np.array(value, dtype=np.float64)


def exact(value: Any) -> OBJECT_ARRAY | sympy.Basic:
    """
    Converts a scalar or array into exact sympy content.

    Integral floats become sympy integers and other floats the rational of their decimal representation.  Sympy
    content is returned as is.

    :param value: The scalar or array to convert
    :return: A sympy scalar for scalar input, otherwise an object array
    """

    if isinstance(value, sympy.Basic):
        return value

    array = elementwise(_exact_number, value)

    if array.ndim == 0:
        return array[()]

    return array


def exact_operands(*values: Any) -> tuple:
    """
    Prepares the operands of a mixed numeric/symbolic operation.

    If any operand is symbolic every operand is converted with :func:`exact`, otherwise they are returned unchanged.

    :param values: The operands
    :return: The (possibly converted) operands in the same order
    """

    if not any(is_symbolic(value) for value in values):
        return values

    return tuple(exact(value) for value in values)


def simplify(array: ARRAY_LIKE) -> MATRIX:
    """
    Simplifies every entry of a symbolic array.  Numeric arrays are returned unchanged.

    :param array: The array to simplify
    :return: The simplified array
    """

    array = as_array(array)

    if not is_symbolic(array):
        return array

    return elementwise(sympy.simplify, array)


def free_symbols(array: ARRAY_LIKE) -> set:
    """
    Returns the set of free symbols appearing anywhere in array.

    :param array: The array to inspect
    :return: The free symbols
    """

    symbols = set()

    for element in np.asarray(array, dtype=object).flat:
        if isinstance(element, sympy.Basic):
            symbols |= element.free_symbols

    return symbols


def resolve(array: ARRAY_LIKE) -> MATRIX:
    """
    Converts a symbolic array without free symbols into a float64 array.

    Arrays that still contain free symbols, or that evaluate to non-real values, are returned symbolic.

    :param array: The array to resolve
    :return: The numeric array if fully resolved, otherwise the symbolic array
    """

    array = as_array(array)

    if not is_symbolic(array) or free_symbols(array):
        return array

    try:
        return elementwise(float, array).astype(np.float64)

    except TypeError:
        # complex valued entries stay symbolic
        return array


def _substitution_mapping(variables: Any, values: Any) -> dict:
    """
    Builds a sympy substitution dictionary from the accepted ``variables, values`` forms.
    """

    if isinstance(variables, Mapping):
        return dict(variables)

    if isinstance(variables, (sympy.Basic, str)):
        return {variables: values}

    variables = list(variables)
    values = list(np.ravel(np.asarray(values, dtype=object)))

    if len(variables) != len(values):
        raise InvalidArguments('{} variables were given but {} values'.format(len(variables), len(values)))

    return dict(zip(variables, values))


def substitute(array: ARRAY_LIKE, variables: Any, values: Any = None) -> MATRIX:
    """
    Substitutes values for symbolic unknowns throughout array.

    ``variables`` may be a single symbol (or applied function such as ``theta(t)``), a sequence of them paired with
    a sequence of ``values``, or a mapping from variables to values (in which case ``values`` is ignored).  If every
    symbol is resolved the result is a float64 array.

    :param array: The array to substitute into
    :param variables: The unknowns to replace
    :param values: The values to replace them with
    :return: The substituted array
    """

    array = as_array(array)

    if not is_symbolic(array):
        return array

    mapping = _substitution_mapping(variables, values)

    return resolve(elementwise(lambda element: element.subs(mapping), array))


def differentiate(array: ARRAY_LIKE, variable: sympy.Symbol = TIME) -> MATRIX:
    """
    Differentiates every entry of array with respect to ``variable``.

    Numeric arrays are constant, so their derivative is an array of zeros.

    :param array: The array to differentiate
    :param variable: The variable to differentiate with respect to
    :return: The derivative
    """

    array = as_array(array)

    if not is_symbolic(array):
        return np.zeros_like(array)

    return elementwise(lambda element: sympy.diff(element, variable), array)


def determinant(matrix: ARRAY_LIKE) -> SCALAR:
    """
    Computes the determinant of a square matrix.

    :param matrix: The matrix
    :return: The determinant as a float or a sympy expression
    """

    matrix = as_array(matrix)

    if is_symbolic(matrix):
        return sympy.Matrix(matrix.tolist()).det()

    return float(np.linalg.det(matrix))


def solve(a: ARRAY_LIKE, b: ARRAY_LIKE) -> MATRIX:
    """
    Solves the linear system ``a @ x = b`` for ``x``.

    :param a: The square system matrix
    :param b: The right hand side
    :return: The solution
    """

    a = as_array(a)
    b = as_array(b)

    if is_symbolic(a) or is_symbolic(b):
        a, b = exact_operands(a, b)
        return as_array(sympy.Matrix(a.tolist()).LUsolve(sympy.Matrix(b.tolist())))

    return np.linalg.solve(a, b)


def vector_norm(vector: ARRAY_LIKE) -> SCALAR:
    """
    Computes the euclidean norm of a vector.

    :param vector: The vector
    :return: The norm as a float or a sympy expression
    """

    vector = as_array(vector)

    if is_symbolic(vector):
        return sympy.sqrt(sum(element ** 2 for element in vector.flat))

    return float(np.linalg.norm(vector))


def vanishes(value: SCALAR) -> bool:
    """
    Returns ``True`` if a symbolic scalar provably simplifies to zero.

    Float coefficients are rationalized first, so ``1.0*x - x`` vanishes.
    """

    return sympy.simplify(sympy.nsimplify(value, rational=True)).is_zero is True


def all_close(a: ARRAY_LIKE, b: ARRAY_LIKE, eps_factor: float) -> bool:
    r"""
    Compares two arrays element by element.

    Numeric arrays are equal when

    .. math::
        |a-b| \le f\epsilon\left(\max(1, |a|) + \max(1, |b|)\right)

    holds for every element, where :math:`f` is ``eps_factor`` and :math:`\epsilon` is machine epsilon.  Symbolic
    arrays are equal only if the difference provably simplifies to zero; in case of doubt they are not equal.

    :param a: The first array
    :param b: The second array
    :param eps_factor: The multiple of machine epsilon to tolerate
    :return: Whether the arrays are equal
    """

    a = as_array(a)
    b = as_array(b)

    if a.shape != b.shape:
        return False

    if is_symbolic(a) or is_symbolic(b):
        a, b = exact_operands(a, b)
        difference = np.asarray(a - b, dtype=object)
        return all(vanishes(element) for element in difference.flat)

    tolerance = eps_factor * EPS * (np.maximum(np.abs(a), 1) + np.maximum(np.abs(b), 1))

    return bool(np.all(np.abs(a - b) <= tolerance))


def is_null(value: SCALAR, tolerance: float) -> bool:
    """
    Checks whether a scalar magnitude vanishes.

    Numeric values vanish when their magnitude is at most ``tolerance``, symbolic values when they simplify to 0.

    :param value: The value to check
    :param tolerance: The numeric tolerance
    :return: Whether the value is null
    """

    if is_symbolic(value):
        return vanishes(value)

    return bool(np.abs(value) <= tolerance)


def clip_unit(value: SCALAR) -> SCALAR:
    """
    Clips numeric values into [-1, 1] to protect ``acos``/``asin`` from rounding.  Symbolic values pass through.
    """

    if is_symbolic(value):
        return value

    return float(np.clip(value, -1.0, 1.0))


def _dispatch(numeric: Callable, symbolic: Callable) -> Callable:

    def function(*args):
        if any(is_symbolic(arg) for arg in args):
            return symbolic(*(sympy.sympify(arg) for arg in args))

        return numeric(*args)

    return function


# scalar elementary functions that keep sympy content symbolic
cos = _dispatch(np.cos, sympy.cos)
sin = _dispatch(np.sin, sympy.sin)
sqrt = _dispatch(np.sqrt, sympy.sqrt)
acos = _dispatch(np.arccos, sympy.acos)
asin = _dispatch(np.arcsin, sympy.asin)
atan2 = _dispatch(np.arctan2, sympy.atan2)
