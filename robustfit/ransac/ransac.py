import logging
import math as m
import sys

import numpy as np

from robustfit.exceptions import ModelFitFailureLimitExceededError
from robustfit.model import MaskElementSet
from robustfit.robust_estimator import RobustEstimator, subsetOf

logger = logging.getLogger(__name__)


class _Settings:

    def __init__(self):
        self.threshold = 0.0                     # 决定内点和外点的阈值，误差不超过阈值的点为内点
        self.confidence = 0.99                   # 至少抽到一个全内点样本的期望概率
        self.max_model_fail_number = 1000        # 拟合器从最小样本拟合失败的最大次数
        self.max_iteration_number = 32767        # 全局最大迭代次数，迭代预算不超过该值


class _Statistics:

    def __init__(self):
        self.iteration_number = 0                # 成功拟合出模型的迭代次数
        self.model_fail_number = 0               # 最小样本拟合失败的次数
        self.refit_number = 0                    # 用一致集重新拟合模型的次数
        self.best_support = 0                    # 最佳模型的内点数目


def getIterationNumber(inlier_ratio, sample_size, confidence):
    """ 计算当前内点比例下期望的迭代数目 H(w, p)

    k = round( log(1 - p) / log(1 - w^m) )，保证以概率 p 至少抽到一个不含外点的最小样本

    参数
    ----------
    inlier_ratio : float
        内点比例 w
    sample_size : int
        最小样本数 m
    confidence : float
        置信概率 p

    返回
    ----------
    int
        迭代数目；w^m 为 1 时返回 0，w^m 小于机器精度时返回 sys.maxsize
    """
    Pi = inlier_ratio ** sample_size
    if Pi >= 1.0:
        return 0
    if Pi < sys.float_info.epsilon:
        return sys.maxsize
    log1 = m.log1p(-confidence)
    log2 = m.log1p(-Pi)
    return int(m.floor(log1 / log2 + 0.5))


class RANSAC(RobustEstimator):
    """ RANSAC 随机抽样一致性鲁棒估计

    参考 Fischler & Bolles, Random Sample Consensus: A Paradigm for Model Fitting with
    Applications to Image Analysis and Automated Cartography, CACM 24(6), 1981
    """

    def __init__(self, threshold, success_probability=0.99, random=None):
        """ 初始化 RANSAC

        参数
        ----------
        threshold : float
            决定内点和外点的误差阈值，非负
        success_probability : float 可选
            至少抽到一个全内点样本的期望概率，取值 (0, 1)
        random : random.Random 可选
            随机源，默认不设种子
        """
        super().__init__(random)
        self.settings = _Settings()
        self.statistics = _Statistics()

        if not threshold >= 0:
            raise ValueError(f"Invalid threshold: {threshold}")
        self.settings.threshold = threshold
        self.setSuccessProbability(success_probability)

    def setSuccessProbability(self, success_probability):
        """ 设置至少抽到一个全内点样本的期望概率，用于决定迭代次数 """
        if not 0 < success_probability < 1:
            raise ValueError(f"Invalid probability: {success_probability}")
        self.settings.confidence = success_probability

    def perform(self, fitter, data, monitor=None):
        """ 运行 RANSAC 求解过程

        参数
        ----------
        fitter : Fitter
            模型拟合器
        data : list 或 numpy
            数据点集合
        monitor : RansacMonitor 可选
            监视器

        返回
        ----------
        object
            最佳模型

        异常
        ----------
        NotEnoughDataError
            数据点数目少于最小样本数
        NoModelFoundError
            数据点数目等于最小样本数且无法拟合
        ModelFitFailureLimitExceededError
            最小样本拟合失败次数达到上限
        """
        self.statistics = _Statistics()
        model = self.performCheck(fitter, data, monitor)
        if model is not None:
            return model

        point_number = len(data)
        sample_size = fitter.sampleSize()

        # 记录全局的最佳模型，内点数目，内点集合
        so_far_the_best_model = None
        so_far_the_best_support = 0
        so_far_the_best_inliers = np.zeros(point_number, dtype=bool)

        # 第一个模型得到后会根据内点比例重新估计
        max_iteration = 1

        while self.statistics.iteration_number < min(max_iteration, self.settings.max_iteration_number):
            # Sk ← Draw a minimal sample
            sample, sample_mask = self._drawMinimalSample(point_number, sample_size)

            # θk ← Estimate a model using Sk
            model = fitter.computeModel(subsetOf(data, sample))
            if monitor is not None:
                monitor.modelFromMinimalSampleSet(MaskElementSet(sample_mask), model)

            if model is None:
                # 失败的拟合不计入迭代次数
                self.statistics.model_fail_number += 1
                if self.statistics.model_fail_number >= self.settings.max_model_fail_number:
                    logger.warning("Fitter failed on %d minimal samples, giving up",
                                   self.statistics.model_fail_number)
                    raise ModelFitFailureLimitExceededError(
                        "Fitter failed to compute a model from a minimal data set too many times")
                continue

            # wk ← Compute the support of θk
            inliers = self.__getConsensusSet(fitter, data, model, sample_mask)
            support = int(np.count_nonzero(inliers))

            # if wk > w∗ then θ∗, L∗, w∗ ← θk, Lk, wk
            if support > so_far_the_best_support:
                if support > sample_size:
                    # 用全部内点重新拟合模型
                    refit_model = fitter.computeModel(subsetOf(data, np.flatnonzero(inliers)))
                    self.statistics.refit_number += 1
                else:
                    # 没有新增内点，仍然是最小样本
                    refit_model = model
                if monitor is not None:
                    monitor.modelRefit(model, MaskElementSet(inliers), refit_model)
                if refit_model is None:
                    # 新增的内点使数据退化，最小样本模型仍以全部内点为内点
                    logger.debug("Refit from %d inliers failed, keeping minimal sample model", support)
                    refit_model = model

                so_far_the_best_model = refit_model
                so_far_the_best_support = support
                so_far_the_best_inliers = inliers

                # 更新最大迭代数
                max_iteration = getIterationNumber(support / point_number,
                                                   sample_size,
                                                   self.settings.confidence)
                logger.debug("New best model with %d/%d inliers, iteration budget %d",
                             support, point_number, max_iteration)

            self.statistics.iteration_number += 1

        if max_iteration > self.settings.max_iteration_number:
            logger.debug("Iteration budget %d capped at %d iterations",
                         max_iteration, self.settings.max_iteration_number)
        self.statistics.best_support = so_far_the_best_support
        if monitor is not None:
            monitor.success(so_far_the_best_model, MaskElementSet(so_far_the_best_inliers))
        return so_far_the_best_model

    def __getConsensusSet(self, fitter, data, model, sample_mask):
        """ 样本点加上其余误差不超过阈值的点，构成模型的一致集

        参数
        ----------
        fitter : Fitter
            模型拟合器
        data : list 或 numpy
            数据点集合
        model : object
            当前模型
        sample_mask : numpy
            最小样本的 bool 掩码

        返回
        ----------
        numpy
            一致集的 bool 掩码
        """
        residuals = fitter.errors(model, data)
        return sample_mask | (residuals <= self.settings.threshold)
