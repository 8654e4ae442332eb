"""
robustfit

RANSAC and RECON robust model estimation over a generic fitter contract.
"""

__version__ = "1.0.0"

from .exceptions import (ModelFitFailureLimitExceededError, NoConsensusFoundError,
                         NoModelFoundError, NotEnoughDataError)
from .estimator import Fitter, FitterHomography, FitterLine
from .model import ElementSet, FullElementSet, MaskElementSet
from .robust_estimator import RobustEstimator
from .ransac import RANSAC, RansacMonitor
from .recon import RECON, ReconMonitor

__all__ = [
    "__version__",
    "NoModelFoundError",
    "NotEnoughDataError",
    "ModelFitFailureLimitExceededError",
    "NoConsensusFoundError",
    "Fitter",
    "FitterLine",
    "FitterHomography",
    "ElementSet",
    "FullElementSet",
    "MaskElementSet",
    "RobustEstimator",
    "RANSAC",
    "RansacMonitor",
    "RECON",
    "ReconMonitor",
]
