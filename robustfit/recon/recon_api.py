import logging

import numpy as np

from robustfit.estimator import FitterHomography, FitterLine
from .monitor import ReconMonitor
from .recon import RECON

logger = logging.getLogger(__name__)


class _InlierRecorder(ReconMonitor):
    """ 记录最终内点集合的监视器 """

    def __init__(self):
        self.inliers = None

    def success(self, model, inliers):
        self.inliers = inliers.toMask()


def findModel(fitter, data, min_overlap_fraction=.99 * .99, random=None):
    """ 用 RECON 求解模型并返回内点 mask

    参数
    --------
    fitter : Fitter
        模型拟合器
    data : list 或 numpy
        数据点集合
    min_overlap_fraction : float
        alpha 一致性要求的公共点比例下限
    random : random.Random 可选
        随机源

    返回
    --------
    object, numpy
        模型，标注内点（1）和外点（0）的 mask
    """
    recon = RECON(min_overlap_fraction=min_overlap_fraction, random=random)
    recorder = _InlierRecorder()
    model = recon.perform(fitter, data, recorder)
    logger.info("RECON finished after %d attempts, %d inliers",
                recon.statistics.attempt_number, int(np.count_nonzero(recorder.inliers)))
    return model, recorder.inliers.astype(np.uint8)


def findLine(points, random=None):
    """ 二维直线求解，不需要内点阈值 """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    return findModel(FitterLine(), points, random=random)


def findHomography(src_points, dst_points, random=None):
    """ 单应矩阵求解，不需要重投影误差阈值

    返回
    --------
    numpy, numpy
        单应矩阵，标注内点和外点的 mask
    """
    points = np.c_[np.asarray(src_points, dtype=float).reshape(-1, 2),
                   np.asarray(dst_points, dtype=float).reshape(-1, 2)]
    model, mask = findModel(FitterHomography(), points, random=random)
    return model.descriptor, mask
