from dataclasses import dataclass, fields

from abc import ABCMeta


@dataclass
class UserOptions(metaclass=ABCMeta):
    """
    This is an abstract class used to create a dataclass of user options.

    These options are used to set defaults for parameters of the class the options belong to.

    Example:
        :class:`.BasisOptions` contains the default tolerances and simplification setting for :class:`.Basis`.

    Custom objects built from this abstract class should follow the naming scheme <class_name>Options and be passed
    as the ``options`` keyword argument of the class they configure.

    To apply options to an instance, :meth:`apply_options` should be invoked.

    for example:
        >>> @dataclass
        >>> class ExampleOptions(UserOptions):
        >>>     tolerance : float = 1e-12

        >>> class Example:
        >>>     def __init__(self, options = None):
        >>>         if options is None:
        >>>             options = ExampleOptions()
        >>>         options.apply_options(self) #apply the options as attributes of self
        >>> my_example = Example()
        >>> print(my_example.tolerance)
        ...     1e-12
    """

    def override_options(self):
        '''
        This method is used for special cases when certain options should be adjusted before they are applied
        '''
        pass

    def apply_options(self, target: object) -> None:
        """
        Update the options as attributes of the target instance

        :param target: the instance that we are to update
        """
        target.__dict__.update(self.options_dict)

    @property
    def options_dict(self) -> dict:
        """
        Determine the options input to the dataclass.

        Only dataclass fields (including inherited ones) are reported, internal attributes are ignored
        """

        self.override_options()
        return {field.name: getattr(self, field.name) for field in fields(self)}
