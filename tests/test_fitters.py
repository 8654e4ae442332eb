"""Tests for the line and homography fitters."""

import math

import numpy as np
import pytest

from robustfit import FitterHomography, FitterLine
from robustfit.model import Homography, Line


H_TRUE = np.array([[1.1, 0.05, 3.0],
                   [-0.02, 0.95, -2.0],
                   [1e-4, 2e-4, 1.0]])


def project(H, src):
    """Apply a homography to (n, 2) points."""
    homogeneous = np.c_[src, np.ones(len(src))] @ H.T
    return homogeneous[:, 0:2] / homogeneous[:, 2:3]


class TestFitterLine:
    """Test the total least squares line fitter."""

    def test_two_points(self):
        """Two points define y = 2x + 1."""
        line = FitterLine().computeModel(np.array([[0.0, 1.0], [1.0, 3.0]]))
        assert isinstance(line, Line)
        assert np.linalg.norm(line.normal) == pytest.approx(1.0)
        assert abs(np.dot(line.normal, [2.0, -1.0]) / math.sqrt(5)) == pytest.approx(1.0)
        assert FitterLine().error(line, np.array([0.0, 0.0])) == pytest.approx(1 / math.sqrt(5))
        assert FitterLine().error(line, np.array([2.0, 5.0])) == pytest.approx(0.0, abs=1e-12)

    def test_coincident_points(self):
        """Identical points do not define a line."""
        assert FitterLine().computeModel(np.array([[3.0, 4.0], [3.0, 4.0]])) is None

    def test_least_squares_fit(self):
        """A symmetric noisy point set is fitted through its centroid."""
        points = np.array([[0.0, 0.1], [0.0, -0.1], [3.0, 0.1], [3.0, -0.1]])
        line = FitterLine().computeModel(points)
        assert abs(line.normal[1]) == pytest.approx(1.0)
        assert abs(line.offset) == pytest.approx(0.0, abs=1e-12)

    def test_errors_match_error(self):
        """The vectorised residuals agree with the per-point distance."""
        fitter = FitterLine()
        line = fitter.computeModel(np.array([[0.0, 0.0], [4.0, 3.0]]))
        points = np.random.default_rng(0).uniform(-10, 10, (25, 2))
        expected = [fitter.error(line, p) for p in points]
        assert np.allclose(fitter.errors(line, points), expected)

    def test_sample_size(self):
        """A line needs two points."""
        assert FitterLine().sampleSize() == 2


class TestFitterHomography:
    """Test the four-point and normalised homography solvers."""

    def test_minimal_sample(self):
        """Four exact correspondences recover the homography."""
        src = np.array([[0.0, 0.0], [100.0, 0.0], [100.0, 80.0], [0.0, 80.0]])
        data = np.c_[src, project(H_TRUE, src)]
        model = FitterHomography().computeModel(data)
        assert isinstance(model, Homography)
        assert np.allclose(model.descriptor, H_TRUE, atol=1e-6)

    def test_normalized_fit(self):
        """Many exact correspondences recover the homography through normalisation."""
        src = np.random.default_rng(1).uniform(0, 100, (30, 2))
        data = np.c_[src, project(H_TRUE, src)]
        model = FitterHomography().computeModel(data)
        assert np.allclose(model.descriptor, H_TRUE, atol=1e-6)
        assert np.all(FitterHomography().errors(model, data) < 1e-6)

    def test_orientation_violation(self):
        """A sample that flips the point order is rejected."""
        src = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
        dst = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
        assert FitterHomography().computeModel(np.c_[src, dst]) is None

    def test_collinear_sample(self):
        """Collinear points give a rank deficient system."""
        src = np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
        assert FitterHomography().computeModel(np.c_[src, src]) is None

    def test_errors_match_error(self):
        """The cv2 based residuals agree with the per-point reprojection error."""
        fitter = FitterHomography()
        rng = np.random.default_rng(2)
        src = rng.uniform(0, 100, (20, 2))
        dst = project(H_TRUE, src) + rng.normal(0, 2.0, (20, 2))
        data = np.c_[src, dst]
        model = Homography(H_TRUE)
        expected = [fitter.error(model, d) for d in data]
        assert np.allclose(fitter.errors(model, data), expected)

    def test_point_at_infinity(self):
        """A source point mapped to infinity has an infinite error."""
        fitter = FitterHomography()
        model = Homography(np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [1.0, 0.0, -1.0]]))
        datum = np.array([1.0, 5.0, 0.0, 0.0])
        assert fitter.error(model, datum) == math.inf
        assert fitter.errors(model, datum.reshape(1, 4))[0] == math.inf


class TestModels:
    """Test the model value classes."""

    def test_default_descriptors_are_independent(self):
        """Default-constructed models do not share their descriptor arrays."""
        first, second = Line(), Line()
        first.descriptor[2] = 5.0
        assert second.descriptor.tolist() == [0.0, 1.0, 0.0]

        first, second = Homography(), Homography()
        first.descriptor[0, 2] = 3.0
        assert np.array_equal(second.descriptor, np.eye(3))

    def test_descriptor_is_copied(self):
        """A model keeps its own copy of the given coefficients."""
        matrix = np.eye(3)
        model = Homography(matrix)
        matrix[0, 0] = 2.0
        assert model.descriptor[0, 0] == 1.0
        assert Line([3.0, 4.0, 0.0]).normal.tolist() == [3.0, 4.0]
