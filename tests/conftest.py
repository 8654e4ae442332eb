"""Shared fixtures for robustfit tests."""

import random

import pytest

from robustfit import Fitter


class FitterMean(Fitter):
    """Model is the mean of the subset, error is the absolute difference."""

    def __init__(self, minimal_sample_size=1):
        super().__init__(minimal_sample_size)

    def computeModel(self, data):
        return sum(data) / len(data)

    def error(self, model, datum):
        return abs(model - datum)


class FitterMeanNoRefit(FitterMean):
    """Like FitterMean, but fails on anything larger than a minimal sample."""

    def computeModel(self, data):
        if len(data) > self.sampleSize():
            return None
        return super().computeModel(data)


class FitterFailing(Fitter):
    """Never produces a model."""

    def computeModel(self, data):
        return None

    def error(self, model, datum):
        return 0.0


class FitterCyclic(Fitter):
    """Data is range(n); the first `inlier_number` indices are inliers.

    A model fitted to inlier i orders the inliers cyclically starting at i,
    so two different inlier models never rank the same inlier at the same
    position. Outlier samples are degenerate. Larger subsets yield
    ('refit', size).
    """

    inlier_number = 70

    def __init__(self):
        super().__init__(1)

    def computeModel(self, data):
        if len(data) == 1:
            return data[0] if data[0] < self.inlier_number else None
        return ('refit', len(data))

    def error(self, model, datum):
        if datum < self.inlier_number:
            return ((datum - model) % self.inlier_number + 1) * 0.01
        return 10.0 + datum


class FitterCyclicNoRefit(FitterCyclic):
    """FitterCyclic whose refit always fails."""

    def computeModel(self, data):
        if len(data) > 1:
            return None
        return super().computeModel(data)


class RecordingMonitor:
    """Records every callback of both RANSAC and RECON monitors.

    Element sets are copied into Python sets since they are only valid during
    the callback.
    """

    def __init__(self):
        self.samples = []           # (sample indices, model)
        self.refits = []            # (last sample, model, inliers, refit model)
        self.consistent = []        # (new model, existing model, common indices)
        self.not_consistent = []    # (new model, existing model)
        self.successes = []         # (model, inliers, element set size)

    def modelFromMinimalSampleSet(self, samples, model):
        self.samples.append((set(samples), model))

    def modelRefit(self, model, inliers, refit_model):
        self.refits.append((self.samples[-1][0], model, set(inliers), refit_model))

    def modelPairConsistent(self, new_model, existing_model, consistent_data):
        self.consistent.append((new_model, existing_model, set(consistent_data)))

    def modelPairNotConsistent(self, new_model, existing_model):
        self.not_consistent.append((new_model, existing_model))

    def success(self, model, inliers):
        self.successes.append((model, set(inliers), inliers.size()))


@pytest.fixture
def mean_fitter():
    return FitterMean()


@pytest.fixture
def seeded_random():
    return random.Random(47565)


@pytest.fixture
def monitor():
    return RecordingMonitor()
