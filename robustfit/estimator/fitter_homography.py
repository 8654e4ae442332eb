import math as m

import cv2
import numpy as np
from numpy import linalg

from robustfit.model import Homography
from .fitter import Fitter

# 齐次坐标 w 小于该值时，认为点被映射到无穷远
_W_EPSILON = np.finfo(np.float32).eps


class FitterHomography(Fitter):
    """ 单应矩阵拟合器，每个数据点为一对匹配点 [x1, y1, x2, y2] """

    def __init__(self):
        super().__init__(4)

    def computeModel(self, data):
        """ 从匹配点对拟合单应矩阵

        最小样本直接求解线性方程组；非最小样本先对点坐标归一化以保证数值稳定性。

        参数
        ----------
        data : numpy
            形状为 (n, 4) 的匹配点对

        返回
        ----------
        Homography
            拟合得到的单应矩阵；样本退化时返回 None
        """
        points = np.asarray(data, dtype=float).reshape(-1, 4)
        sample_number = np.shape(points)[0]
        if sample_number < self.sampleSize():
            return None

        if sample_number == self.sampleSize():
            if not self.__isValidSample(points):
                return None
            return self.__solve(points)

        normalized = self.__normalizePoints(points)
        if normalized is None:
            return None
        normalized_points, normalizing_transform_source, normalizing_transform_destination = normalized
        model = self.__solve(normalized_points)
        if model is None:
            return None
        # 反归一化
        descriptor = np.dot(linalg.inv(normalizing_transform_destination), model.descriptor)
        descriptor = np.dot(descriptor, normalizing_transform_source)
        if abs(descriptor[2, 2]) < np.finfo(float).eps:
            return None
        return Homography(descriptor / descriptor[2, 2])

    def error(self, model, datum):
        """ 源点经单应变换后与目标点之间的距离 """
        descriptor = model.descriptor
        x1, y1, x2, y2 = datum[0], datum[1], datum[2], datum[3]
        t1 = descriptor[0, 0] * x1 + descriptor[0, 1] * y1 + descriptor[0, 2]
        t2 = descriptor[1, 0] * x1 + descriptor[1, 1] * y1 + descriptor[1, 2]
        t3 = descriptor[2, 0] * x1 + descriptor[2, 1] * y1 + descriptor[2, 2]
        if abs(t3) <= _W_EPSILON:
            return m.inf
        return m.sqrt((x2 - t1 / t3) ** 2 + (y2 - t2 / t3) ** 2)

    def errors(self, model, data):
        points = np.asarray(data, dtype=float).reshape(-1, 4)
        src = np.ascontiguousarray(points[:, 0:2]).reshape(-1, 1, 2)
        projected = cv2.perspectiveTransform(src, model.descriptor).reshape(-1, 2)
        residuals = linalg.norm(points[:, 2:4] - projected, axis=1)
        # 映射到无穷远的点误差为无穷大
        w = np.dot(points[:, 0:2], model.descriptor[2, 0:2]) + model.descriptor[2, 2]
        residuals[np.abs(w) <= _W_EPSILON] = m.inf
        return residuals

    def __solve(self, points):
        """ 四点法（或最小二乘）求解 h33 = 1 的单应矩阵 """
        sample_number = np.shape(points)[0]
        coefficients = np.zeros([2 * sample_number, 8])
        inhomogeneous = np.zeros(2 * sample_number)

        x1, y1, x2, y2 = points[:, 0], points[:, 1], points[:, 2], points[:, 3]
        zeros, ones = np.zeros(sample_number), np.ones(sample_number)
        # 参数矩阵设置，每对点贡献两行
        coefficients[0::2] = np.column_stack([-x1, -y1, -ones, zeros, zeros, zeros, x2 * x1, x2 * y1])
        coefficients[1::2] = np.column_stack([zeros, zeros, zeros, -x1, -y1, -ones, y2 * x1, y2 * y1])
        inhomogeneous[0::2] = -x2
        inhomogeneous[1::2] = -y2

        if linalg.matrix_rank(coefficients) < 8:
            return None

        # 利用 QR 分解求解 h
        Q, R = linalg.qr(coefficients)
        h = np.dot(linalg.pinv(R), np.dot(Q.T, inhomogeneous))
        if not np.all(np.isfinite(h)):
            return None
        return Homography(np.r_[h, 1.0].reshape((3, 3)))

    def __isValidSample(self, points):
        """ 检查朝向约束，取四个样本点两两交叉验证 """
        a, b, c, d = points[0], points[1], points[2], points[3]

        p = self.__crossProduct(a[0:2], b[0:2])
        q = self.__crossProduct(a[2:4], b[2:4])
        if (p[0] * c[0] + p[1] * c[1] + p[2]) * (q[0] * c[2] + q[1] * c[3] + q[2]) < 0:
            return False
        if (p[0] * d[0] + p[1] * d[1] + p[2]) * (q[0] * d[2] + q[1] * d[3] + q[2]) < 0:
            return False

        p = self.__crossProduct(c[0:2], d[0:2])
        q = self.__crossProduct(c[2:4], d[2:4])
        if (p[0] * a[0] + p[1] * a[1] + p[2]) * (q[0] * a[2] + q[1] * a[3] + q[2]) < 0:
            return False
        if (p[0] * b[0] + p[1] * b[1] + p[2]) * (q[0] * b[2] + q[1] * b[3] + q[2]) < 0:
            return False

        return True

    def __crossProduct(self, vector1, vector2):
        """ 过两点直线的齐次坐标 """
        return np.array([vector1[1] - vector2[1],
                         vector2[0] - vector1[0],
                         vector1[0] * vector2[1] - vector1[1] * vector2[0]])

    def __normalizePoints(self, points):
        """ 平移到质心并缩放，使到质心的平均距离为 sqrt(2) """
        mass_point_src = np.mean(points[:, 0:2], axis=0)
        mass_point_dst = np.mean(points[:, 2:4], axis=0)

        average_distance_src = np.mean(linalg.norm(points[:, 0:2] - mass_point_src, axis=1))
        average_distance_dst = np.mean(linalg.norm(points[:, 2:4] - mass_point_dst, axis=1))
        if average_distance_src == 0.0 or average_distance_dst == 0.0:
            return None

        ratio_src = m.sqrt(2) / average_distance_src
        ratio_dst = m.sqrt(2) / average_distance_dst

        normalized_points = np.c_[(points[:, 0:2] - mass_point_src) * ratio_src,
                                  (points[:, 2:4] - mass_point_dst) * ratio_dst]

        normalizing_transform_source = np.array([[ratio_src, 0, -ratio_src * mass_point_src[0]],
                                                 [0, ratio_src, -ratio_src * mass_point_src[1]],
                                                 [0, 0, 1]])
        normalizing_transform_destination = np.array([[ratio_dst, 0, -ratio_dst * mass_point_dst[0]],
                                                      [0, ratio_dst, -ratio_dst * mass_point_dst[1]],
                                                      [0, 0, 1]])
        return normalized_points, normalizing_transform_source, normalizing_transform_destination
