from unittest import TestCase

import warnings

import numpy as np

import sympy

from scipy.spatial.transform import Rotation as ReferenceRotation

from rigidkit import Basis, BasisOptions, CANONICAL_BASIS, Tensor, TIME
from rigidkit.errors import DegenerateRepresentation, InvalidArguments, ShapeMismatch
from rigidkit.rotations import rot_x, rot_y, rot_z, axis_angle_to_rotmat, euler_to_rotmat


def _random_matrices(count, seed):
    return ReferenceRotation.random(count, random_state=seed).as_matrix()


def _is_zero(expression):
    return sympy.simplify(sympy.nsimplify(expression, rational=True)) == 0


class TestConstruction(TestCase):

    def test_default(self):

        np.testing.assert_array_equal(Basis().m, np.eye(3))

        np.testing.assert_array_equal(CANONICAL_BASIS.m, np.eye(3))

    def test_copy(self):

        mat = rot_z(0.4)

        b1 = Basis(mat)
        b2 = Basis(b1)

        np.testing.assert_array_equal(b2.m, mat)
        self.assertIsNot(b1, b2)

        ref = Basis(rot_x(1.3))

        np.testing.assert_array_almost_equal(Basis(b1, ref).m, rot_x(1.3) @ mat)

    def test_matrix(self):

        mat = rot_y(-0.9)

        np.testing.assert_array_equal(Basis(mat).m, mat)

        # flat input is read row major
        np.testing.assert_array_equal(Basis(mat.ravel()).m, mat)

        np.testing.assert_array_equal(Basis(mat.tolist()).m, mat)

        ref = Basis(rot_z(0.2))

        np.testing.assert_array_almost_equal(Basis(mat, ref).m, rot_z(0.2) @ mat)

        np.testing.assert_array_almost_equal(Basis.from_matrix(mat, reference=ref).m, rot_z(0.2) @ mat)

    def test_quaternion(self):

        q = [np.sqrt(2)/2, 0, 0, np.sqrt(2)/2]

        np.testing.assert_array_almost_equal(Basis(q).m, rot_x(np.pi/2))

        ref = Basis(rot_y(0.5))

        np.testing.assert_array_almost_equal(Basis(q, ref).m, rot_y(0.5) @ rot_x(np.pi/2))

        np.testing.assert_array_almost_equal(Basis.from_quaternion(q, reference=ref).m, rot_y(0.5) @ rot_x(np.pi/2))

    def test_quaternion_normalization(self):

        with self.assertWarns(UserWarning):
            basis = Basis([1, 2, 3, 4])

        np.testing.assert_array_almost_equal(basis.quaternions(), np.array([1, 2, 3, 4]) / np.sqrt(30))

        with self.assertRaises(DegenerateRepresentation):
            Basis([0, 0, 0, 0])

    def test_axis_angle(self):

        np.testing.assert_array_almost_equal(Basis([0, 0, 1], 0.3).m, rot_z(0.3))

        ref = Basis(rot_x(np.pi/2))

        # array components are relative to the reference
        np.testing.assert_array_almost_equal(Basis([0, 0, 1], 0.3, ref).m, rot_x(np.pi/2) @ rot_z(0.3))

        # tensors are geometric vectors
        np.testing.assert_array_almost_equal(Basis(Tensor([0, 0, 1]), 0.3, ref).m, rot_z(0.3) @ rot_x(np.pi/2))

        np.testing.assert_array_almost_equal(Basis.from_axis_angle([0, 0, 1], 0.3, reference=ref).m,
                                             rot_x(np.pi/2) @ rot_z(0.3))

        with self.assertWarns(UserWarning):
            basis = Basis([0, 0, 2], 0.3)

        np.testing.assert_array_almost_equal(basis.m, rot_z(0.3))

    def test_columns(self):

        mat = _random_matrices(1, 3)[0]

        c1, c2, c3 = mat.T

        np.testing.assert_array_almost_equal(Basis(c1, c2, c3).m, mat)

        np.testing.assert_array_almost_equal(Basis(*c1, c2, c3).m, mat)

        np.testing.assert_array_almost_equal(Basis(c1, *c2, c3).m, mat)

        np.testing.assert_array_almost_equal(Basis(*c1, *c2, c3).m, mat)

        np.testing.assert_array_almost_equal(Basis(*c1, *c2, *c3).m, mat)

        np.testing.assert_array_almost_equal(Basis(Tensor(c1), Tensor(c2), Tensor(c3)).m, mat)

        ref = Basis(rot_z(1.0))

        np.testing.assert_array_almost_equal(Basis(c1, c2, c3, ref).m, rot_z(1.0) @ mat)

        np.testing.assert_array_almost_equal(Basis(*c1, *c2, *c3, ref).m, rot_z(1.0) @ mat)

        np.testing.assert_array_almost_equal(Basis.from_columns(c1, c2, c3, reference=ref).m, rot_z(1.0) @ mat)

        # tensor columns are geometric, so the reference does not change them
        np.testing.assert_array_almost_equal(Basis(Tensor(c1), Tensor(c2), Tensor(c3), ref).m, mat)

    def test_euler(self):

        angles = [0.1, 0.2, 0.3]

        np.testing.assert_array_almost_equal(Basis.from_euler(angles).m, euler_to_rotmat(angles, [3, 1, 3]))

        ref = Basis(rot_x(0.6))

        basis = Basis.from_euler(angles, [1, 2, 3], reference=ref)

        np.testing.assert_array_almost_equal(basis.m, rot_x(0.6) @ euler_to_rotmat(angles, [1, 2, 3]))

        with self.assertRaises(InvalidArguments):
            Basis.from_euler([0.1, 0.2])

    def test_invalid(self):

        with self.assertRaises(InvalidArguments):
            Basis([1, 2, 3])

        with self.assertRaises(InvalidArguments):
            Basis(1, 2, 3, 4)

        with self.assertRaises(InvalidArguments):
            Basis(*range(6))

        with self.assertRaises(InvalidArguments):
            Basis([1, 0, 0], 1, 0, [0, 1, 0], 0)

        with self.assertRaises(InvalidArguments):
            Basis(1, [0, 1, 0], 0, 0, [0, 0, 1])

        with self.assertRaises(ValueError):
            Basis(1, 2)

        with self.assertRaises(ShapeMismatch):
            Basis.from_matrix([1, 2, 3])

    def test_unconvertible_arguments(self):

        basis = Basis()

        # the trailing basis is the reference, leaving a basis where the axis and angle belong
        with self.assertRaises(InvalidArguments):
            Basis(basis, basis, basis)

        with self.assertRaises(InvalidArguments):
            Basis([0, 0, 1], 'not an angle')

        with self.assertRaises(InvalidArguments):
            Basis([1, 0, 0], [0, 1, 0], object())

    def test_subclass_factories(self):

        class Tagged(Basis):
            pass

        basis = Tagged.from_euler([0.1, 0.2, 0.3])

        self.assertIsInstance(basis, Tagged)

        self.assertIsInstance(basis.rotatex(0.3), Tagged)


class TestRepresentations(TestCase):

    def test_matrix_composition(self):

        matrices = _random_matrices(6, 17)

        for m1, m2 in zip(matrices[:3], matrices[3:]):
            b1 = Basis(m1)
            b2 = Basis(m2)

            np.testing.assert_array_equal(b1.matrix(b2), m2.T @ m1)

            np.testing.assert_array_equal(b1.matrix(), m1)

            np.testing.assert_array_almost_equal(b1.matrix(b2), Basis(m2.T @ m1).m)

    def test_unit_vectors(self):

        mat = rot_z(np.pi/2)

        basis = Basis(mat)

        np.testing.assert_array_almost_equal(basis.i().components(), [0, 1, 0])
        np.testing.assert_array_almost_equal(basis.j().components(), [-1, 0, 0])
        np.testing.assert_array_almost_equal(basis.k().components(), [0, 0, 1])

        np.testing.assert_array_almost_equal(basis.i().components(basis), [1, 0, 0])
        np.testing.assert_array_almost_equal(basis.j().components(basis), [0, 1, 0])

    def test_axis_angle_round_trip(self):

        for mat in _random_matrices(100, 23):
            basis = Basis(mat)

            angle = basis.rotangle()

            if angle < 1e-3 or angle > np.pi - 1e-3:
                continue

            axis = basis.rotaxis().components()

            np.testing.assert_array_almost_equal(axis_angle_to_rotmat(axis, angle), mat)

    def test_relative_axis_angle(self):

        ref = Basis(rot_x(0.8))

        basis = Basis([0, 0, 1], 0.5, ref)

        self.assertAlmostEqual(basis.rotangle(ref), 0.5)

        np.testing.assert_array_almost_equal(basis.rotaxis(ref).components(ref), [0, 0, 1])

    def test_quaternion_round_trip(self):

        for quaternion in ReferenceRotation.random(100, random_state=29).as_quat():

            if quaternion[3] < 0:
                quaternion = -quaternion

            if quaternion[3] < 1e-3:
                continue

            np.testing.assert_array_almost_equal(Basis(quaternion).quaternions(), quaternion)

    def test_euler_round_trip(self):

        for order, angles in (([3, 1, 3], [0.3, 0.5, 0.7]), ([3, 1, 3], [-1.5, 2.5, 3.0]),
                              ([1, 2, 3], [0.3, 0.5, 0.7]), ([1, 2, 3], [-2.0, -1.2, 0.1])):

            first, second, third = angles
            axes = {1: 'rotatex', 2: 'rotatey', 3: 'rotatez'}

            # successive rotations about the local axes
            basis = Basis()
            basis = getattr(basis, axes[order[0]])(first)
            basis = getattr(basis, axes[order[1]])(second)
            basis = getattr(basis, axes[order[2]])(third)

            np.testing.assert_array_almost_equal(basis.euler(order=order), angles)

    def test_relative_euler(self):

        ref = Basis(rot_y(1.1))

        basis = Basis.from_euler([0.4, 0.9, -0.2], 'zxz', reference=ref)

        np.testing.assert_array_almost_equal(basis.euler(ref, 'zxz'), [0.4, 0.9, -0.2])

        np.testing.assert_array_almost_equal(basis.euler(ref), [0.4, 0.9, -0.2])

    def test_degenerate(self):

        with self.assertRaises(DegenerateRepresentation):
            Basis([0, 0, 1], 0).rotaxis()

        for axis in ([1, 0, 0], [0, 1, 0], [0, 0, 1], [np.sqrt(3)/3]*3):
            with self.subTest(axis=axis), self.assertRaises(DegenerateRepresentation):
                Basis(axis, np.pi).quaternions()

        with self.assertRaises(DegenerateRepresentation):
            Basis(rot_z(0.3)).euler()

        with self.assertRaises(DegenerateRepresentation):
            Basis(rot_y(np.pi/2)).euler(order=[1, 2, 3])

    def test_rotate(self):

        np.testing.assert_array_almost_equal(Basis().rotatex(0.2).m, rot_x(0.2))

        basis = Basis(rot_z(np.pi/2))

        np.testing.assert_array_almost_equal(basis.rotatex(0.2).m, rot_z(np.pi/2) @ rot_x(0.2))
        np.testing.assert_array_almost_equal(basis.rotatey(0.2).m, rot_z(np.pi/2) @ rot_y(0.2))
        np.testing.assert_array_almost_equal(basis.rotatez(0.2).m, rot_z(np.pi/2 + 0.2))

        # the original is untouched
        np.testing.assert_array_almost_equal(basis.m, rot_z(np.pi/2))


class TestProperties(TestCase):

    def test_randomized_constructors(self):

        rng = np.random.default_rng(31)

        matrices = _random_matrices(200, 37)
        quaternions = ReferenceRotation.random(200, random_state=41).as_quat()

        bases = []

        for mat, quaternion in zip(matrices, quaternions):
            axis = rng.normal(size=3)
            axis /= np.linalg.norm(axis)

            angles = rng.uniform(-np.pi, np.pi, 3)

            bases.append(Basis(mat))
            bases.append(Basis(quaternion))
            bases.append(Basis(axis, rng.uniform(-np.pi, np.pi)))
            bases.append(Basis(*mat.T))
            bases.append(Basis.from_euler(angles, [1, 2, 3]))

        self.assertEqual(len(bases), 1000)

        for basis in bases:
            self.assertTrue(basis.isunitary())
            self.assertTrue(basis.isrighthanded())

    def test_not_unitary(self):

        self.assertFalse(Basis(2*np.eye(3)).isunitary())

        self.assertFalse(Basis(np.diag([1, 1, -1.])).isrighthanded())

        self.assertTrue(Basis(np.diag([1, 1, -1.])).isunitary())

    def test_symbolic_unitary(self):

        theta = sympy.Symbol('theta')

        basis = Basis(rot_z(theta) @ rot_x(2*theta))

        self.assertTrue(basis.isunitary())
        self.assertTrue(basis.isrighthanded())

    def test_equality(self):

        mat = _random_matrices(1, 43)[0]

        self.assertEqual(Basis(mat), Basis(mat + 1e-14))

        self.assertNotEqual(Basis(mat), Basis(mat + 1e-3))

        self.assertTrue(Basis() == np.eye(3))

        self.assertFalse(Basis() == 'not a basis')

        self.assertFalse(Basis() == None)

    def test_equality_options(self):

        mat = _random_matrices(1, 47)[0]

        strict = Basis(mat, options=BasisOptions(equality_eps_factor=1))

        self.assertNotEqual(strict, Basis(mat + 1e-14))

    def test_symbolic_equality(self):

        theta = sympy.Symbol('theta')

        self.assertEqual(Basis(rot_z(theta)), Basis(rot_z(theta/2) @ rot_z(theta/2)))

        self.assertNotEqual(Basis(rot_z(theta)), Basis(rot_z(-theta)))


class TestAlgebra(TestCase):

    def test_compose(self):

        m1, m2 = _random_matrices(2, 53)

        np.testing.assert_array_almost_equal((Basis(m1) * Basis(m2)).m, m1 @ m2)

        np.testing.assert_array_almost_equal(Basis(m1).compose(Basis(m2)).m, m1 @ m2)

    def test_divide(self):

        m1, m2 = _random_matrices(2, 59)

        np.testing.assert_array_almost_equal((Basis(m1) / Basis(m2)).m, m1 @ m2.T)

        np.testing.assert_array_almost_equal(Basis(m1).divide_right(Basis(m2)).m, m1 @ m2.T)

        np.testing.assert_array_almost_equal(Basis(m1).divide_left(Basis(m2)).m, m1.T @ m2)

        # left division recovers the relative matrix
        np.testing.assert_array_almost_equal(Basis(m1).divide_left(Basis(m2)).m, Basis(m2).matrix(Basis(m1)))

    def test_symbolic_divide(self):

        theta = sympy.Symbol('theta')

        quotient = Basis(rot_z(theta)).divide_left(Basis(rot_z(2*theta)))

        self.assertEqual(quotient, Basis(rot_z(theta)))

    def test_operators_reject_other_types(self):

        with self.assertRaises(TypeError):
            Basis() * 2

        with self.assertRaises(TypeError):
            Basis() / 'x'


class TestKinematics(TestCase):

    def setUp(self):

        self.theta = sympy.Function('theta')(TIME)
        self.phi = sympy.Function('phi')(TIME)

    def test_omega_single_axis(self):

        omega = Basis(rot_z(self.theta)).omega().components()

        self.assertTrue(_is_zero(omega[0]))
        self.assertTrue(_is_zero(omega[1]))
        self.assertTrue(_is_zero(omega[2] - self.theta.diff(TIME)))

        omega = Basis(rot_x(self.theta)).omega().components()

        self.assertTrue(_is_zero(omega[0] - self.theta.diff(TIME)))
        self.assertTrue(_is_zero(omega[2]))

    def test_omega_numeric(self):

        np.testing.assert_array_equal(Basis(rot_y(0.3)).omega().components(), [0, 0, 0])

    def test_omega_composition(self):

        reference = Basis(rot_z(self.phi))

        basis = Basis(rot_x(self.theta), reference)

        # z rotation followed by a rotation about the rotated x axis
        expected = [self.theta.diff(TIME) * sympy.cos(self.phi),
                    self.theta.diff(TIME) * sympy.sin(self.phi),
                    self.phi.diff(TIME)]

        omega = basis.omega().components()

        for value, truth in zip(omega, expected):
            self.assertTrue(_is_zero(value - truth))

        relative = basis.omega(reference).components()

        for value, truth in zip(relative, expected[:2] + [0]):
            self.assertTrue(_is_zero(value - truth))

    def test_alpha_transport(self):

        reference = Basis(rot_z(self.phi))

        basis = Basis([0, 0, 1], self.theta, reference)

        alpha = basis.alpha(reference).components()

        self.assertTrue(_is_zero(alpha[0]))
        self.assertTrue(_is_zero(alpha[1]))
        self.assertTrue(_is_zero(alpha[2] - self.theta.diff(TIME, 2)))

        for value in basis.alpha(basis).components():
            self.assertTrue(_is_zero(value))

    def test_alpha_cross_term(self):

        reference = Basis(rot_z(self.phi))

        basis = Basis(rot_x(self.theta), reference)

        absolute = basis.alpha().components()
        relative = basis.alpha(reference).components()
        reference_alpha = reference.alpha().components()
        cross = sympy.Matrix(reference.omega().components().tolist()).cross(
            sympy.Matrix(basis.omega().components().tolist()))

        for i in range(3):
            self.assertTrue(_is_zero(relative[i] - (absolute[i] - reference_alpha[i] - cross[i])))


class TestSymbolic(TestCase):

    def test_subs(self):

        theta = sympy.Symbol('theta')

        basis = Basis(rot_z(theta))

        self.assertTrue(basis.is_symbolic)

        numeric = basis.subs(theta, 0.3)

        self.assertFalse(numeric.is_symbolic)
        self.assertEqual(numeric.m.dtype, np.float64)

        np.testing.assert_array_almost_equal(numeric.m, rot_z(0.3))

        np.testing.assert_array_almost_equal(basis.subs({theta: 0.3}).m, rot_z(0.3))

        np.testing.assert_array_almost_equal(basis.subs([theta], [0.3]).m, rot_z(0.3))

    def test_partial_subs(self):

        a, b = sympy.symbols('a b')

        basis = Basis(rot_z(a) @ rot_x(b))

        with self.assertWarns(UserWarning):
            partial = basis.subs(a, 0.1)

        self.assertTrue(partial.is_symbolic)

        with warnings.catch_warnings():
            warnings.simplefilter('error')
            numeric = partial.subs(b, 0.2)

        np.testing.assert_array_almost_equal(numeric.m, rot_z(0.1) @ rot_x(0.2))

    def test_symbolic_representations(self):

        theta = sympy.Symbol('theta', positive=True)

        basis = Basis(rot_z(theta))

        self.assertTrue(_is_zero(basis.rotangle() - sympy.acos(sympy.cos(theta))))

        numeric = sympy.lambdify(theta, sympy.Matrix(basis.quaternions().tolist()))(0.4)

        np.testing.assert_array_almost_equal(np.asarray(numeric, dtype=np.float64).ravel(),
                                             [0, 0, np.sin(0.2), np.cos(0.2)])

    def test_exact_coefficients(self):

        theta = sympy.Symbol('theta')

        basis = Basis([0, 0, 1], theta)

        for element in basis.m.flat:
            self.assertEqual(element.atoms(sympy.Float), set())

        self.assertEqual(Basis(basis.quaternions()), basis)

        relative = Basis([0, 0, 1], theta, CANONICAL_BASIS)

        for element in relative.m.flat:
            self.assertEqual(element.atoms(sympy.Float), set())

        self.assertEqual(relative, basis)

    def test_simplification(self):

        theta = sympy.Symbol('theta')

        mat = rot_z(theta) @ rot_z(-theta)

        simplified = Basis(mat)

        np.testing.assert_array_equal(simplified.m.astype(np.float64), np.eye(3))

        lazy = Basis(mat, options=BasisOptions(simplify=False))

        self.assertNotEqual(lazy.m[0, 0], 1)

        np.testing.assert_array_equal(lazy.simplified().m.astype(np.float64), np.eye(3))
