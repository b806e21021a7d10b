from unittest import TestCase

import numpy as np

import sympy

from rigidkit import Point, Particle, Frame, CANONICAL_FRAME, Basis, Tensor, TIME
from rigidkit.errors import ShapeMismatch
from rigidkit.rotations import rot_x, rot_z


def _is_zero(expression):
    return sympy.simplify(sympy.nsimplify(expression, rational=True)) == 0


class TestPoint(TestCase):

    def test_init(self):

        np.testing.assert_array_equal(Point().r.components(), [0, 0, 0])

        np.testing.assert_array_equal(Point([1, 2, 3]).r.components(), [1, 2, 3])

        frame = Frame([1, 0, 0], rot_z(np.pi/2))

        np.testing.assert_array_almost_equal(Point([1, 0, 0], frame).r.components(), [1, 1, 0])

        with self.assertRaises(ShapeMismatch):
            Point(np.eye(3))

    def test_vel(self):

        x = sympy.Function('x')(TIME)

        point = Point([x, 2 * TIME, 0])

        velocity = point.vel().components()

        self.assertEqual(velocity[0], x.diff(TIME))
        self.assertEqual(velocity[1], 2)

        acceleration = point.accel().components()

        self.assertEqual(acceleration[0], x.diff(TIME, 2))
        self.assertEqual(acceleration[1], 0)

    def test_vel_rotating_frame(self):

        theta = sympy.Function('theta')(TIME)

        frame = Frame(basis=rot_z(theta))

        point = Point([1, 0, 0])

        velocity = point.vel(frame)

        # a fixed point is seen to move on a circle from the rotating frame
        self.assertTrue(_is_zero(velocity @ velocity - theta.diff(TIME)**2))

        for value in point.vel(CANONICAL_FRAME).components():
            self.assertEqual(value, 0)

    def test_subs(self):

        a = sympy.Symbol('a')

        point = Point([a, 1, 2])

        numeric = point.subs(a, 3)

        np.testing.assert_array_equal(numeric.r.components(), [3, 1, 2])

        self.assertTrue(point.r.is_symbolic)

    def test_eq_and_repr(self):

        self.assertEqual(Point([1, 2, 3]), Point([1, 2, 3]))

        self.assertNotEqual(Point([1, 2, 3]), Point([1, 2, 4]))

        self.assertTrue(repr(Point([1, 2, 3])).startswith('Point(r='))


class TestParticle(TestCase):

    def test_init(self):

        particle = Particle(3, [1, 2, 3])

        self.assertEqual(particle.mass.components(), 3)

        np.testing.assert_array_equal(particle.r.components(), [1, 2, 3])

        with self.assertRaises(ShapeMismatch):
            Particle([1, 2, 3])

    def test_momentum(self):

        x = sympy.Function('x')(TIME)
        m = sympy.Symbol('m')

        particle = Particle(m, [x, 0, 0])

        momentum = particle.p().components()

        self.assertEqual(momentum[0], m * x.diff(TIME))

        numeric = particle.subs({m: 2, x: 3 * TIME})

        np.testing.assert_array_almost_equal(np.asarray(numeric.p().components(), dtype=np.float64), [6, 0, 0])

        self.assertEqual(numeric.mass.components(), 2)

    def test_eq(self):

        self.assertEqual(Particle(2, [1, 0, 0]), Particle(2, [1, 0, 0]))

        self.assertNotEqual(Particle(2, [1, 0, 0]), Particle(3, [1, 0, 0]))


class TestFrame(TestCase):

    def test_init(self):

        frame = Frame()

        np.testing.assert_array_equal(frame.m, np.eye(3))
        np.testing.assert_array_equal(frame.r.components(), [0, 0, 0])

        self.assertEqual(frame, CANONICAL_FRAME)

        frame = Frame([1, 2, 3], rot_x(0.3))

        np.testing.assert_array_almost_equal(frame.m, rot_x(0.3))

        frame = Frame(basis=Basis([0, 0, 1], 0.3))

        np.testing.assert_array_almost_equal(frame.m, rot_z(0.3))

    def test_relative(self):

        reference = Frame([1, 0, 0], rot_z(np.pi/2))

        frame = Frame([1, 0, 0], rot_x(0.4), reference)

        np.testing.assert_array_almost_equal(frame.r.components(), [1, 1, 0])

        np.testing.assert_array_almost_equal(frame.m, rot_z(np.pi/2) @ rot_x(0.4))

        np.testing.assert_array_almost_equal(frame.matrix(reference), rot_x(0.4))

    def test_basis_operations(self):

        frame = Frame([1, 2, 3], rot_z(0.2))

        rotated = frame.rotatex(0.5)

        self.assertIsInstance(rotated, Frame)

        np.testing.assert_array_almost_equal(rotated.m, rot_z(0.2) @ rot_x(0.5))

        # the origin travels with the rotation
        np.testing.assert_array_equal(rotated.r.components(), [1, 2, 3])

        self.assertAlmostEqual(frame.rotangle(), 0.2)

    def test_reference_for_tensors(self):

        frame = Frame([5, 5, 5], rot_z(np.pi/2))

        # only the orientation of a frame matters for vector components
        np.testing.assert_array_almost_equal(Tensor([1, 0, 0], frame).components(), [0, 1, 0])

    def test_subs(self):

        theta = sympy.Function('theta')(TIME)
        a = sympy.Symbol('a')

        frame = Frame([a, 0, 0], rot_z(theta))

        numeric = frame.subs({a: 2, theta: 0.5})

        self.assertFalse(numeric.is_symbolic)

        np.testing.assert_array_almost_equal(numeric.m, rot_z(0.5))
        np.testing.assert_array_almost_equal(numeric.r.components(), [2, 0, 0])

    def test_eq(self):

        self.assertEqual(Frame([1, 0, 0], rot_z(0.1)), Frame([1, 0, 0], rot_z(0.1)))

        self.assertNotEqual(Frame([1, 0, 0], rot_z(0.1)), Frame([1, 0, 0], rot_z(0.2)))

        self.assertNotEqual(Frame([1, 0, 0], rot_z(0.1)), Frame([2, 0, 0], rot_z(0.1)))

        self.assertTrue(repr(Frame()).startswith('Frame(r='))

    def test_printing(self):

        self.assertEqual(repr(Frame([1, 2, 3])),
                         'Frame(r=array([1., 2., 3.]), m=array([[1., 0., 0.], [0., 1., 0.], [0., 0., 1.]]))')

        # origins given relative to a reference print in the canonical basis
        reference = Frame(None, rot_z(np.pi/2))

        self.assertTrue(str(Point([1, 0, 0], reference)).startswith('Point(r=['))

        self.assertEqual(str(Particle(2, [1, 0, 0])), 'Particle(mass=2.0, r=[1. 0. 0.])')

        self.assertNotIn('\n', str(Frame([1, 2, 3], rot_z(0.1))))
