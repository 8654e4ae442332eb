import logging

import numpy as np

from robustfit.exceptions import NoModelFoundError, NotEnoughDataError
from robustfit.model import FullElementSet
from robustfit.sampler import UniformSampler

logger = logging.getLogger(__name__)


def subsetOf(data, indices):
    """ 按序号取出数据点子集，返回新的容器

    参数
    ----------
    data : list 或 numpy
        数据点集合
    indices : iterable(int)
        升序排列的序号

    返回
    ----------
    list 或 numpy
        numpy 数据返回数组，其余返回列表
    """
    if isinstance(data, np.ndarray):
        return data[np.asarray(list(indices), dtype=int)]
    return [data[i] for i in indices]


class RobustEstimator:
    """ 鲁棒估计算法基类

    子类实现 perform，并在开始时调用 performCheck 处理数据量不足或恰好为最小样本数的情况。
    """

    def __init__(self, random=None):
        # 全局采样器，持有唯一的随机源
        self.main_sampler = UniformSampler(random)

    def setRandom(self, random):
        """ 设置算法唯一的随机源

        配置不变、输入相同且随机源产生相同序列时，算法的执行过程完全相同。

        参数
        ----------
        random : random.Random
            随机源
        """
        if random is None:
            raise TypeError("random must not be None")
        self.main_sampler.setRandom(random)

    def performCheck(self, fitter, data, monitor=None):
        """ 对输入做初步检查，可能直接得到结果

        参数
        ----------
        fitter : Fitter
            模型拟合器
        data : list 或 numpy
            数据点集合
        monitor : 可选
            监视器，可以为 None

        返回
        ----------
        object
            数据点数目恰好等于最小样本数时返回用全部数据拟合的模型，大于最小样本数时返回 None

        异常
        ----------
        NotEnoughDataError
            数据点数目少于最小样本数
        NoModelFoundError
            数据点数目等于最小样本数，但拟合器无法拟合模型
        """
        point_number = len(data)
        sample_size = fitter.sampleSize()
        if point_number < sample_size:
            raise NotEnoughDataError(
                f"Not enough data to compute model: {point_number} < {sample_size}")
        if point_number == sample_size:
            model = fitter.computeModel(subsetOf(data, range(point_number)))
            if model is None:
                raise NoModelFoundError("Fitter failed to compute model from data set")
            logger.debug("Data set has minimal size %d, fitted directly", point_number)
            if monitor is not None:
                monitor.success(model, FullElementSet(point_number))
            return model
        return None

    def perform(self, fitter, data, monitor=None):
        """ 运行鲁棒估计算法

        参数
        ----------
        fitter : Fitter
            模型拟合器
        data : list 或 numpy
            数据点集合
        monitor : 可选
            监视器，可以为 None

        返回
        ----------
        object
            求解得到的模型，不会为 None

        异常
        ----------
        NoModelFoundError
            无法求得模型
        """
        raise NotImplementedError

    def _drawMinimalSample(self, point_number, sample_size):
        """ 均匀随机抽取最小样本，返回升序序号数组和对应的 bool 掩码 """
        sample_mask = np.zeros(point_number, dtype=bool)
        sample_mask[self.main_sampler.sample(point_number, sample_size)] = True
        return np.flatnonzero(sample_mask), sample_mask
