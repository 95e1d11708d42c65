# tests/test_fem.py

import unittest
import numpy as np
from methods.fem import FEM, build_tridiagonal
from utils.geometry import Grid
from utils.errors import ConfigurationError


class TestGrid(unittest.TestCase):

    def test_spacing_and_coordinates(self):
        grid = Grid(n_nodes=20, length=2.0)
        self.assertAlmostEqual(grid.dx, 2.0 / 19)
        self.assertEqual(len(grid.x), 20)
        self.assertEqual(grid.x[0], 0.0)
        self.assertAlmostEqual(grid.x[-1], 2.0)
        self.assertEqual(grid.x[3], 3 * grid.dx)

    def test_coordinates_are_read_only(self):
        grid = Grid(n_nodes=5, length=1.0)
        with self.assertRaises(ValueError):
            grid.x[0] = 1.0

    def test_invalid_grid(self):
        for n_nodes, length in [(1, 1.0), (0, 1.0), (5, 0.0), (5, -1.0), (5, float("inf")), (2.5, 1.0), (5, "2.0"), (5, None), (5, True)]:
            with self.subTest(n_nodes=n_nodes, length=length):
                with self.assertRaises(ConfigurationError):
                    Grid(n_nodes=n_nodes, length=length)


class TestTridiagonal(unittest.TestCase):

    def test_row_stencil(self):
        diag = np.array([10.0, 20.0, 30.0, 40.0])
        off = np.array([-1.0, -2.0, -3.0, -4.0])
        A = build_tridiagonal(diag, off).toarray()
        expected = np.array(
            [
                [1.0, 0.0, 0.0, 0.0],
                [-2.0, 20.0, -2.0, 0.0],
                [0.0, -3.0, 30.0, -3.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )
        np.testing.assert_array_equal(A, expected)

    def test_clear_boundary_columns(self):
        A = build_tridiagonal(np.full(4, 4.0), np.ones(4), clear_boundary_columns=True).toarray()
        np.testing.assert_array_equal(A[1:-1, 0], 0.0)
        np.testing.assert_array_equal(A[1:-1, -1], 0.0)
        self.assertEqual(A[1, 2], 1.0)
        self.assertEqual(A[2, 1], 1.0)


class TestFEM(unittest.TestCase):

    def test_mass_matrix_boundary_rows(self):
        for n_nodes in [2, 3, 4, 20, 101]:
            with self.subTest(n_nodes=n_nodes):
                M = FEM(Grid(n_nodes=n_nodes, length=2.0)).build_mass().toarray()
                e_first = np.zeros(n_nodes)
                e_first[0] = 1.0
                e_last = np.zeros(n_nodes)
                e_last[-1] = 1.0
                np.testing.assert_array_equal(M[0], e_first)
                np.testing.assert_array_equal(M[-1], e_last)
                np.testing.assert_array_equal(M, M.T)

    def test_mass_matrix_stencil(self):
        grid = Grid(n_nodes=6, length=1.0)
        M = FEM(grid).build_mass().toarray()
        h = grid.dx
        for i in range(1, 5):
            self.assertAlmostEqual(M[i, i], 2.0 / 3.0 * h)
        for i in range(1, 4):
            self.assertAlmostEqual(M[i, i + 1], h / 6.0)
            self.assertAlmostEqual(M[i + 1, i], h / 6.0)
        self.assertEqual(M[1, 0], 0.0)
        self.assertEqual(M[4, 5], 0.0)

    def test_mass_matrix_is_idempotent(self):
        fem = FEM(Grid(n_nodes=20, length=2.0))
        np.testing.assert_array_equal(fem.build_mass().toarray(), fem.build_mass().toarray())

    def test_stiffness_stencil(self):
        grid = Grid(n_nodes=5, length=1.0)
        k = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        K = FEM(grid).build_stif(k).toarray()
        h = grid.dx
        self.assertEqual(K[0, 0], 1.0)
        self.assertEqual(K[-1, -1], 1.0)
        np.testing.assert_array_equal(K[0, 1:], 0.0)
        np.testing.assert_array_equal(K[-1, :-1], 0.0)
        for i in range(1, 4):
            self.assertAlmostEqual(K[i, i], 2.0 * k[i] / h)
            self.assertAlmostEqual(K[i, i - 1], -k[i] / h)
            self.assertAlmostEqual(K[i, i + 1], -k[i] / h)

    def test_stiffness_annihilates_constants(self):
        grid = Grid(n_nodes=12, length=3.0)
        k = np.linspace(1.0, 2.0, 12)
        K = FEM(grid).build_stif(k)
        flux = K @ np.full(12, 1.7)
        np.testing.assert_array_equal(flux[1:-1], 0.0)


if __name__ == '__main__':
    unittest.main()
