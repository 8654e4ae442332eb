import logging

import numpy as np

from robustfit.estimator import FitterHomography, FitterLine
from .monitor import RansacMonitor
from .ransac import RANSAC

logger = logging.getLogger(__name__)


class _InlierRecorder(RansacMonitor):
    """ 记录最终内点集合的监视器 """

    def __init__(self):
        self.inliers = None

    def success(self, model, inliers):
        self.inliers = inliers.toMask()


def __transformInliersToMask(inliers):
    """ 转换内点 bool 掩码为 cv2 match 所需的 0/1 mask """
    return np.asarray(inliers, dtype=np.uint8)


def findModel(fitter, data, threshold, conf=0.99, random=None):
    """ 用 RANSAC 求解模型并返回内点 mask

    参数
    --------
    fitter : Fitter
        模型拟合器
    data : list 或 numpy
        数据点集合
    threshold : float
        决定内点和外点的阈值
    conf : float
        RANSAC 置信参数
    random : random.Random 可选
        随机源

    返回
    --------
    object, numpy
        模型，标注内点和外点的 mask
    """
    ransac = RANSAC(threshold, success_probability=conf, random=random)
    recorder = _InlierRecorder()
    model = ransac.perform(fitter, data, recorder)
    logger.info("RANSAC finished after %d iterations, %d inliers",
                ransac.statistics.iteration_number, int(np.count_nonzero(recorder.inliers)))
    return model, __transformInliersToMask(recorder.inliers)


def findLine(points, threshold=1.0, conf=0.99, random=None):
    """ 二维直线求解

    参数
    --------
    points : numpy
        形状为 (n, 2) 的点集
    threshold : float
        点到直线距离的内点阈值
    conf : float
        RANSAC 置信参数
    random : random.Random 可选
        随机源

    返回
    --------
    Line, numpy
        直线模型，标注内点和外点的 mask
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    return findModel(FitterLine(), points, threshold, conf=conf, random=random)


def findHomography(src_points, dst_points, threshold=1.0, conf=0.99, random=None):
    """ 单应矩阵求解

    参数
    --------
    src_points : numpy
        源图像特征点集合
    dst_points : numpy
        目标图像特征点集合
    threshold : float
        重投影误差的内点阈值
    conf : float
        RANSAC 置信参数
    random : random.Random 可选
        随机源

    返回
    --------
    numpy, numpy
        单应矩阵，标注内点和外点的 mask
    """
    # 合并 points 到同个矩阵：src 在前两列，dst 在后两列
    points = np.c_[np.asarray(src_points, dtype=float).reshape(-1, 2),
                   np.asarray(dst_points, dtype=float).reshape(-1, 2)]
    model, mask = findModel(FitterHomography(), points, threshold, conf=conf, random=random)
    return model.descriptor, mask
