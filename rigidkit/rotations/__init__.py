import rigidkit.rotations.core
import rigidkit.rotations.basis

from rigidkit.rotations.core import *
from rigidkit.rotations.basis import Basis, BasisOptions, CANONICAL_BASIS

__all__ = ['quaternion_to_rotmat', 'axis_angle_to_rotmat', 'euler_to_rotmat',
           'rotmat_to_quaternion', 'rotmat_to_axis', 'rotmat_to_angle', 'rotmat_to_euler',
           'rot_x', 'rot_y', 'rot_z', 'skew',
           'Basis', 'BasisOptions', 'CANONICAL_BASIS']


r"""
This package defines the routines for converting between rotation representations as well as the :class:`.Basis`
class which is the primary way to express orientations in rigidkit.

The rotation representations used in this package are:

.. _rotation-representation-table:

=================  =====================================================================================================
Representation     Description
=================  =====================================================================================================
quaternion         A 4 element rotation quaternion of the form
                   :math:`\mathbf{q}=\left[\begin{array}{c} q_1 \\ q_2 \\ q_3 \\ q_4\end{array}\right]=
                   \left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\\
                   \text{cos}(\frac{\theta}{2})\end{array}\right]`
                   where :math:`\hat{\mathbf{x}}` is the unit rotation axis and :math:`\theta` the rotation angle.
                   :math:`\mathbf{q}` and :math:`-\mathbf{q}` represent the same rotation; extracted quaternions always
                   have :math:`q_4\ge 0`.
axis/angle         A unit axis :math:`\hat{\mathbf{x}}` and the angle :math:`\theta` to rotate about it (Rodrigues'
                   formula).  The axis is undefined for rotations of 0 and 180 degrees.
rotation matrix    A :math:`3\times 3` orthonormal matrix whose columns are the unit vectors of the rotated basis
                   expressed in the reference basis.  Rotation matrices uniquely represent a single rotation.
columns            The three unit vectors of the basis given explicitly, each as a 3 element vector or as 3 scalars.
euler angles       A sequence of 3 angles for intrinsic rotations about the axes of the progressively rotated basis,
                   :math:`\mathbf{T}=\mathbf{R}_{o_1}(a)\mathbf{R}_{o_2}(b)\mathbf{R}_{o_3}(c)`.  Symmetric sequences
                   (such as 3-1-3) repeat the first axis last, asymmetric ones (such as 1-2-3) use all three axes.
=================  =====================================================================================================

Every routine and the :class:`.Basis` class accept numeric (float) or symbolic (sympy) content.
"""
