import numpy as np


class Model:
    """ 鲁棒估计求解模型基类 """

    def __init__(self, descriptor=None):
        self.descriptor = descriptor


class Line(Model):
    """ 二维直线模型 a*x + b*y + c = 0，其中 (a, b) 为单位法向量 """

    def __init__(self, coefficients=None):
        if coefficients is None:
            coefficients = [0.0, 1.0, 0.0]
        super().__init__(np.array(coefficients, dtype=float))

    @property
    def normal(self):
        return self.descriptor[0:2]

    @property
    def offset(self):
        return -self.descriptor[2]


class Homography(Model):
    """ 特征点匹配的单应矩阵模型 """

    def __init__(self, matrix=None):
        if matrix is None:
            matrix = np.eye(3)
        super().__init__(np.array(matrix, dtype=float))
