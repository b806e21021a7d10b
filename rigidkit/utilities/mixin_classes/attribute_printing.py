"""
This module provides a mixin implementing __str__ and __repr__ for the state classes of rigidkit.
"""

from typing import Any


class AttributePrinting:
    """
    A mixin class that provides __str__ and __repr__ functionality from a declared list of state properties.

    Subclasses name the properties making up their state in :attr:`printed_attributes`, in reporting order.  Tensors
    are reported by their canonical components so that a :class:`.Frame` prints as ``Frame(r=..., m=...)`` whatever
    basis its origin was given in.  Line breaks from printing matrices are collapsed so the result is one line.
    """

    printed_attributes: tuple[str, ...] = ()
    """
    The names of the properties reported, in order
    """

    def _build_representation(self, attribute_repr: bool) -> str:
        """
        Implements the basic functionality of turning the instance into a one line string of its state.

        :param attribute_repr: Whether to call repr on attributes instead of str.
        """

        attributes = []

        for name in self.printed_attributes:
            value = _printable(getattr(self, name))

            text = repr(value) if attribute_repr else str(value)

            attributes.append(f"{name}={' '.join(text.split())}")

        return f"{type(self).__name__}({', '.join(attributes)})"

    def __str__(self) -> str:
        return self._build_representation(False)

    def __repr__(self) -> str:
        return self._build_representation(True)


def _printable(value: Any) -> Any:
    # tensors print as their canonical components
    components = getattr(value, 'components', None)

    return components() if callable(components) else value
