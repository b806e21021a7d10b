"""
This module provides the :class:`UserOptionConfigured` mixin class that enables classes to be
configured using :class:`.UserOptions`-derived classes while maintaining the ability to reset
to the original configuration state.

Example:
    Basic usage of the UserOptionConfigured mixin::

        from rigidkit.utilities.options import UserOptions
        from rigidkit.utilities.mixin_classes.user_option_configured import UserOptionConfigured
        from dataclasses import dataclass

        @dataclass
        class SolverOptions(UserOptions):
            tolerance: float = 1e-12
            simplify: bool = True

        class Solver(UserOptionConfigured[SolverOptions], SolverOptions):
            def __init__(self, options: SolverOptions = None):
                super().__init__(SolverOptions, options=options)

        solver = Solver()
        solver.tolerance = 1e-6  # Make a change
        solver.reset_settings()  # Back to 1e-12

.. Note::
    The :class:`UserOptionConfigured` class should come first in the inheritance order
    due to Method Resolution Order (MRO) requirements.
"""

from typing import Generic, TypeVar

from rigidkit.utilities.options import UserOptions


OptionsT = TypeVar("OptionsT", bound=UserOptions)
"""
Type variable bound to UserOptions for type safety
"""


class UserOptionConfigured(Generic[OptionsT]):
    """
    Mixin class providing UserOptions-based configuration with reset capability.

    Subclass it with the :class:`.UserOptions` subclass as the type parameter and pass the options type as the first
    argument to ``super().__init__``.  The options are applied as attributes of the instance, so they travel with
    copies of the instance.

    :attr original_options: The original configuration used during initialization.

    .. Warning::
        If options are not provided during initialization, default initialization of the
        options_type class will be used.
    """

    def __init__(self, options_type: type[OptionsT], *args, options: OptionsT | None = None, **kwargs) -> None:
        """
        :param options_type: The type of the :class:`.UserOptions` to use
        :param options: An optional instance of `options_type` preconfigured.
        """

        super().__init__(*args, **kwargs)

        if options is None:
            options = options_type()

        options.apply_options(self)

        self._original_options: OptionsT = options
        """
        The original configuration for this instance
        """

    def reset_settings(self) -> None:
        """
        Resets the instance to the options it was originally initialized with.
        """

        self.original_options.apply_options(self)

    @property
    def original_options(self) -> OptionsT:
        """
        The original configuration options.

        .. Warning::
            Modifying the returned object will affect reset behavior.
        """
        return self._original_options
