"""
This package contains helpful mixin classes to provide basic functionality throughout rigidkit.
"""

from rigidkit.utilities.mixin_classes.attribute_printing import AttributePrinting
from rigidkit.utilities.mixin_classes.user_option_configured import UserOptionConfigured

__all__ = ["AttributePrinting", "UserOptionConfigured"]
