import numpy as np


class Fitter:
    """ 模型拟合器基类

    负责从一组数据点拟合模型，并给出单个数据点相对模型的误差。
    误差越小表示数据点与模型越吻合。
    """

    def __init__(self, minimal_sample_size):
        """ 初始化拟合器

        参数
        ----------
        minimal_sample_size : int
            拟合模型所需的最少数据点数目
        """
        if minimal_sample_size <= 0:
            raise ValueError(f"Invalid minimal sample size: {minimal_sample_size}")
        self.minimal_sample_size = minimal_sample_size

    def sampleSize(self):
        """ 估计模型所需的最小样本的大小 """
        return self.minimal_sample_size

    def computeModel(self, data):
        """ 从给定的数据点拟合模型

        参数
        ----------
        data : list 或 numpy
            用于拟合模型的数据点，按序号升序排列；不得修改其内容

        返回
        ----------
        object
            拟合得到的模型；数据退化无法拟合时返回 None
        """
        raise NotImplementedError

    def error(self, model, datum):
        """ 给定模型和单个数据点，计算非负误差 """
        raise NotImplementedError

    def errors(self, model, data):
        """ 计算全部数据点相对模型的误差

        子类可以重写为向量化实现，但结果必须与逐点调用 error 一致。

        参数
        ----------
        model : object
            模型
        data : list 或 numpy
            数据点集合

        返回
        ----------
        numpy
            长度为 len(data) 的误差数组
        """
        return np.array([self.error(model, datum) for datum in data], dtype=float)
