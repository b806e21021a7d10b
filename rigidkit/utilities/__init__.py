# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This package provides the configuration plumbing shared by the rigidkit classes.

:mod:`.options` holds the :class:`.UserOptions` dataclass base that every options class derives from, and
:mod:`.mixin_classes` holds the mixins that apply options to instances and print them.
"""

from rigidkit.utilities.options import UserOptions
from rigidkit.utilities.mixin_classes import AttributePrinting, UserOptionConfigured

__all__ = ['UserOptions', 'AttributePrinting', 'UserOptionConfigured']
