import numpy as np
import pytest

from dlinalg.linalg import blas


class TestLevel1:
    def test_copy_with_offsets(self):
        x = np.arange(6.0)
        y = np.zeros(5)
        blas.copy(3, x, y, offx=2, offy=1)
        np.testing.assert_array_equal(y, [0.0, 2.0, 3.0, 4.0, 0.0])

    def test_copy_zero_length_is_noop(self):
        x = np.arange(3.0)
        y = np.full(3, 7.0)
        blas.copy(0, x, y, offx=3, offy=3)
        np.testing.assert_array_equal(y, [7.0, 7.0, 7.0])

    def test_axpy(self):
        x = np.array([1.0, 2.0, 3.0])
        y = np.array([10.0, 20.0, 30.0])
        blas.axpy(3, 2.0, x, y)
        np.testing.assert_array_equal(y, [12.0, 24.0, 36.0])

    def test_axpy_partial(self):
        x = np.array([1.0, 1.0])
        y = np.zeros(4)
        blas.axpy(2, -1.5, x, y, offy=2)
        np.testing.assert_array_equal(y, [0.0, 0.0, -1.5, -1.5])

    def test_dot_and_asum(self):
        x = np.array([1.0, -2.0, 3.0])
        y = np.array([4.0, 5.0, -6.0])
        assert blas.dot(3, x, y) == pytest.approx(-24.0)
        assert blas.dot(2, x, y, offx=1, offy=1) == pytest.approx(-28.0)
        assert blas.asum(3, x) == pytest.approx(6.0)
        assert blas.dot(0, x, y) == 0.0
        assert blas.asum(0, x) == 0.0

    def test_sbmv_diagonal(self):
        a = np.array([1.0, 2.0, 3.0])
        x = np.array([4.0, 5.0, 6.0])
        y = np.full(3, 100.0)
        blas.sbmv_diagonal(3, 0.5, a, x, y)
        np.testing.assert_allclose(y, [2.0, 5.0, 9.0])


class TestLevel2And3:
    @pytest.fixture
    def a(self, rng):
        return rng.standard_normal((3, 4))

    def test_gemv_no_transpose(self, a, rng):
        x = rng.standard_normal(4)
        y = np.zeros(3)
        blas.gemv(2.0, a, x, y, 'N')
        np.testing.assert_allclose(y, 2.0 * a @ x)

    def test_gemv_transpose(self, a, rng):
        x = rng.standard_normal(3)
        y = np.zeros(4)
        blas.gemv(1.0, a, x, y, 't')
        np.testing.assert_allclose(y, a.T @ x)

    def test_gemv_rejects_flag(self, a):
        with pytest.raises(ValueError):
            blas.gemv(1.0, a, np.zeros(4), np.zeros(3), 'C')

    def test_symv_reads_lower_row_major_triangle(self, rng):
        full = rng.standard_normal((4, 4))
        sym = np.tril(full) + np.tril(full, -1).T
        garbage = np.tril(full) + np.triu(np.full((4, 4), 1e3), 1)
        x = rng.standard_normal(4)
        y = np.zeros(4)
        blas.symv(1.5, garbage, x, y)
        np.testing.assert_allclose(y, 1.5 * sym @ x)

    @pytest.mark.parametrize("ta, tb", [("N", "N"), ("T", "N"),
                                        ("N", "T"), ("T", "T")])
    def test_gemm(self, rng, ta, tb):
        a = rng.standard_normal((3, 2) if ta == "N" else (2, 3))
        b = rng.standard_normal((2, 5) if tb == "N" else (5, 2))
        c = np.full((3, 5), np.nan)
        blas.gemm(1.0, a, b, c, ta, tb)
        opa = a if ta == "N" else a.T
        opb = b if tb == "N" else b.T
        np.testing.assert_allclose(c, opa @ opb)

    def test_gemm_empty_inner_dimension(self):
        c = np.ones((2, 2))
        blas.gemm(1.0, np.zeros((2, 0)), np.zeros((0, 2)), c)
        np.testing.assert_array_equal(c, np.zeros((2, 2)))

    def test_ger_in_place(self, a, rng):
        x = rng.standard_normal(3)
        y = rng.standard_normal(4)
        expected = a + 0.5 * np.outer(x, y)
        blas.ger(0.5, x, y, a)
        np.testing.assert_allclose(a, expected)

    def test_syr_updates_one_triangle(self, rng):
        a = np.zeros((3, 3))
        x = rng.standard_normal(3)
        blas.syr(2.0, x, a)
        np.testing.assert_allclose(np.tril(a), np.tril(2.0 * np.outer(x, x)))
        np.testing.assert_array_equal(np.triu(a, 1), np.zeros((3, 3)))

    def test_syr2(self, rng):
        a = np.zeros((3, 3))
        x = rng.standard_normal(3)
        y = rng.standard_normal(3)
        blas.syr2(1.0, x, y, a)
        full = np.outer(x, y) + np.outer(y, x)
        np.testing.assert_allclose(np.tril(a), np.tril(full))
        np.testing.assert_array_equal(np.triu(a, 1), np.zeros((3, 3)))
