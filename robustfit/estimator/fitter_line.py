import numpy as np

from robustfit.model import Line
from .fitter import Fitter


class FitterLine(Fitter):
    """ 二维直线拟合器，数据点为 (x, y) """

    def __init__(self):
        super().__init__(2)

    def computeModel(self, data):
        """ 两点确定直线，多于两点时用 SVD 做整体最小二乘拟合

        参数
        ----------
        data : numpy
            形状为 (n, 2) 的点集

        返回
        ----------
        Line
            拟合的直线；所有点重合时返回 None
        """
        points = np.asarray(data, dtype=float).reshape(-1, 2)
        if np.shape(points)[0] < self.sampleSize():
            return None
        # 以质心为原点，最小奇异值对应的右奇异向量即为法向量
        centroid = np.mean(points, axis=0)
        _, s, vt = np.linalg.svd(points - centroid)
        if s[0] <= np.finfo(float).eps * max(1.0, np.max(np.abs(points))):
            return None
        normal = vt[-1]
        return Line(np.r_[normal, -np.dot(normal, centroid)])

    def error(self, model, datum):
        """ 点到直线的距离 """
        return abs(np.dot(model.descriptor[0:2], datum) + model.descriptor[2])

    def errors(self, model, data):
        points = np.asarray(data, dtype=float).reshape(-1, 2)
        return np.abs(np.dot(points, model.descriptor[0:2]) + model.descriptor[2])
