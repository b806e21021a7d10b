"""
This module contains the fundamental numeric/symbolic routines for rotation calculations.  It has no dependencies on
the :class:`.Basis` class so that the routines can be used (and tested) on their own as building blocks for the
higher level rotation representation.
"""

import rigidkit.rotations.core.conversions
import rigidkit.rotations.core.elementals

from rigidkit.rotations.core.conversions import (quaternion_to_rotmat, axis_angle_to_rotmat, euler_to_rotmat,
                                                 rotmat_to_quaternion, rotmat_to_axis, rotmat_to_angle,
                                                 rotmat_to_euler)

from rigidkit.rotations.core.elementals import rot_x, rot_y, rot_z, skew

__all__ = ['quaternion_to_rotmat', 'axis_angle_to_rotmat', 'euler_to_rotmat',
           'rotmat_to_quaternion', 'rotmat_to_axis', 'rotmat_to_angle', 'rotmat_to_euler',
           'rot_x', 'rot_y', 'rot_z', 'skew']
