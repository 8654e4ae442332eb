import logging

import numpy as np

from robustfit.exceptions import ModelFitFailureLimitExceededError, NoConsensusFoundError
from robustfit.model import MaskElementSet
from robustfit.robust_estimator import RobustEstimator, subsetOf

logger = logging.getLogger(__name__)


class _Settings:

    def __init__(self):
        self.max_attempt_number = 200            # 抽取最小样本的最大尝试次数
        self.max_model_fail_number = 1000        # 拟合器从最小样本拟合失败的最大次数
        self.min_overlap_fraction = .99 * .99    # 残差前 n 项中公共点比例的下限，即论文中的 alpha^2
        self.min_chunk_fraction = 0.1            # 判定一致时已检查的数据比例下限（不含）
        self.max_chunk_fraction = 0.9            # 判定一致时已检查的数据比例上限（不含）
        self.triangle_size_tolerance = 0.05      # 三个两两公共集大小的最大相对差
        self.triangle_min_common_fraction = 0.02 # 三者公共集占数据的最小比例


class _Statistics:

    def __init__(self):
        self.attempt_number = 0                  # 已抽取最小样本的次数
        self.duplicate_sample_number = 0         # 重复抽到已尝试样本的次数
        self.model_fail_number = 0               # 最小样本拟合失败的次数
        self.model_number = 0                    # 保存的模型数目
        self.consistent_pair_number = 0          # 一致的模型对数目


class ModelData:
    """ 一个最小样本模型及其按误差升序排列的数据点序号 """

    def __init__(self, model, minimal_sample, residuals):
        self.model = model
        self.minimal_sample = minimal_sample     # 最小样本的 bool 掩码
        # 稳定排序，误差相同的点保持序号顺序
        self.residual_order = np.argsort(residuals, kind='stable')


class MatchingModelPair:
    """ 两个相互一致的模型（ModelData 在列表中的位置）及其公共内点 """

    def __init__(self, model1, model2, common_data):
        self.model1 = model1
        self.model2 = model2
        self.common_data = common_data


def checkAlphaConsistency(residual_order1,
                          residual_order2,
                          min_overlap_fraction=.99 * .99,
                          min_chunk_fraction=0.1,
                          max_chunk_fraction=0.9):
    """ 检查两个模型的残差排序是否 alpha 一致

    同步地逐位比较两个序列，第 n 位之后公共点比例达到 min_overlap_fraction，
    且已检查的数据比例位于 (min_chunk_fraction, max_chunk_fraction) 之间时，两模型一致。

    参数
    ----------
    residual_order1 : numpy
        模型一的数据点序号，按误差升序
    residual_order2 : numpy
        模型二的数据点序号，按误差升序
    min_overlap_fraction : float
        公共点比例下限
    min_chunk_fraction : float
        已检查比例下限
    max_chunk_fraction : float
        已检查比例上限

    返回
    ----------
    numpy
        一致时返回两模型公共内点的 bool 掩码，否则返回 None
    """
    order1 = np.asarray(residual_order1).tolist()
    order2 = np.asarray(residual_order2).tolist()
    point_number = len(order1)

    seen_in_one_model = [False] * point_number
    seen_in_both_models = [False] * point_number
    common_point_number = 0

    for n in range(point_number):
        index1 = order1[n]
        index2 = order2[n]
        if index1 == index2:
            # 第 n 位是同一个点
            seen_in_one_model[index1] = True
            seen_in_both_models[index1] = True
        else:
            for index in (index1, index2):
                if seen_in_one_model[index]:
                    # 之前在另一个序列中出现过
                    seen_in_both_models[index] = True
                    common_point_number += 1
                else:
                    seen_in_one_model[index] = True

        # 0..n 已处理完
        chunk_size = n + 1
        if common_point_number / chunk_size >= min_overlap_fraction and \
                min_chunk_fraction < chunk_size / point_number < max_chunk_fraction:
            return np.array(seen_in_both_models, dtype=bool)
    return None


class RECON(RobustEstimator):
    """ RECON 残差一致性鲁棒估计，不需要内点阈值

    参考 Raguram & Frahm, RECON: Scale-Adaptive Robust Estimation via Residual Consensus, ICCV 2011
    """

    def __init__(self, min_overlap_fraction=.99 * .99, random=None):
        """ 初始化 RECON

        参数
        ----------
        min_overlap_fraction : float 可选
            alpha 一致性要求的公共点比例下限，取值 (0, 1]
        random : random.Random 可选
            随机源，默认不设种子
        """
        super().__init__(random)
        self.settings = _Settings()
        self.statistics = _Statistics()
        self.setMinOverlapFraction(min_overlap_fraction)

    def setMinOverlapFraction(self, min_overlap_fraction):
        """ 设置 alpha 一致性要求的公共点比例下限 """
        if not 0 < min_overlap_fraction <= 1:
            raise ValueError(f"Invalid overlap fraction: {min_overlap_fraction}")
        self.settings.min_overlap_fraction = min_overlap_fraction

    def perform(self, fitter, data, monitor=None):
        """ 运行 RECON 求解过程

        参数
        ----------
        fitter : Fitter
            模型拟合器
        data : list 或 numpy
            数据点集合
        monitor : ReconMonitor 可选
            监视器

        返回
        ----------
        object
            用三个相互一致模型的公共内点拟合的模型

        异常
        ----------
        NotEnoughDataError
            数据点数目少于最小样本数
        NoModelFoundError
            数据点数目等于最小样本数且无法拟合
        ModelFitFailureLimitExceededError
            最小样本拟合失败次数达到上限
        NoConsensusFoundError
            达到最大尝试次数仍未找到一致的三个模型
        """
        self.statistics = _Statistics()
        model = self.performCheck(fitter, data, monitor)
        if model is not None:
            return model

        point_number = len(data)
        sample_size = fitter.sampleSize()

        stored_model_data = []          # 已保存的 ModelData
        stored_sample_index = {}        # 最小样本掩码 → stored_model_data 中的位置
        matching_model_pairs = []       # 相互一致的模型对

        for _ in range(self.settings.max_attempt_number):
            self.statistics.attempt_number += 1
            sample, sample_mask = self._drawMinimalSample(point_number, sample_size)

            sample_key = sample_mask.tobytes()
            if sample_key in stored_sample_index:
                # 这个样本已经尝试过
                self.statistics.duplicate_sample_number += 1
                continue

            model = fitter.computeModel(subsetOf(data, sample))
            if monitor is not None:
                monitor.modelFromMinimalSampleSet(MaskElementSet(sample_mask), model)

            if model is None:
                self.statistics.model_fail_number += 1
                if self.statistics.model_fail_number >= self.settings.max_model_fail_number:
                    logger.warning("Fitter failed on %d minimal samples, giving up",
                                   self.statistics.model_fail_number)
                    raise ModelFitFailureLimitExceededError(
                        "Fitter failed to compute a model from a minimal data set too many times")
                continue

            # 计算并排序全部残差
            new_model_data = ModelData(model, sample_mask, fitter.errors(model, data))

            # 与之前的模型逐一检查一致性，值为公共内点
            matching_previous_models = self.__findMatchingModels(new_model_data,
                                                                 stored_model_data,
                                                                 monitor)

            if matching_previous_models:
                # 寻找三个相互一致的模型：检查已有的模型对是否都与新模型一致
                for existing_pair in matching_model_pairs:
                    if existing_pair.model1 not in matching_previous_models or \
                            existing_pair.model2 not in matching_previous_models:
                        continue
                    common_data = self.__closeTriangle(existing_pair.common_data,
                                                       matching_previous_models[existing_pair.model1],
                                                       matching_previous_models[existing_pair.model2],
                                                       point_number)
                    if common_data is None:
                        continue

                    inlier_model = fitter.computeModel(subsetOf(data, np.flatnonzero(common_data)))
                    if inlier_model is None:
                        logger.debug("Refit from %d common inliers failed, keeping minimal sample model",
                                     int(np.count_nonzero(common_data)))
                        inlier_model = model
                    logger.debug("Consensus of three models found after %d attempts, %d common inliers",
                                 self.statistics.attempt_number, int(np.count_nonzero(common_data)))
                    if monitor is not None:
                        monitor.success(inlier_model, MaskElementSet(common_data))
                    return inlier_model

            # 保存新模型和新找到的一致模型对
            new_index = len(stored_model_data)
            stored_model_data.append(new_model_data)
            stored_sample_index[sample_key] = new_index
            self.statistics.model_number += 1
            for existing_index, common_data in matching_previous_models.items():
                matching_model_pairs.append(MatchingModelPair(new_index, existing_index, common_data))

        logger.warning("No consensus after %d attempts (%d models, %d consistent pairs)",
                       self.statistics.attempt_number,
                       self.statistics.model_number,
                       self.statistics.consistent_pair_number)
        raise NoConsensusFoundError("Maximum attempt count reached, no consensus")

    def __findMatchingModels(self, new_model_data, stored_model_data, monitor):
        """ 找出与新模型 alpha 一致的已有模型

        参数
        ----------
        new_model_data : ModelData
            新模型
        stored_model_data : list(ModelData)
            已保存的模型
        monitor : ReconMonitor
            监视器，可以为 None

        返回
        ----------
        dict
            已有模型在列表中的位置 → 公共内点 bool 掩码
        """
        matching_previous_models = {}
        for existing_index, existing_model_data in enumerate(stored_model_data):
            if np.array_equal(new_model_data.minimal_sample, existing_model_data.minimal_sample):
                # 来自同一个样本，不比较
                continue
            common_data = checkAlphaConsistency(new_model_data.residual_order,
                                                existing_model_data.residual_order,
                                                self.settings.min_overlap_fraction,
                                                self.settings.min_chunk_fraction,
                                                self.settings.max_chunk_fraction)
            if common_data is not None:
                matching_previous_models[existing_index] = common_data
                self.statistics.consistent_pair_number += 1
                if monitor is not None:
                    monitor.modelPairConsistent(new_model_data.model,
                                                existing_model_data.model,
                                                MaskElementSet(common_data))
            elif monitor is not None:
                monitor.modelPairNotConsistent(new_model_data.model, existing_model_data.model)
        return matching_previous_models

    def __closeTriangle(self, common_12, common_new_1, common_new_2, point_number):
        """ 检查三个相互一致的模型的公共内点是否足够接近

        返回
        ----------
        numpy
            满足条件时返回三者公共内点的 bool 掩码，否则返回 None
        """
        common_all = common_12 & common_new_1 & common_new_2
        common_numbers = [int(np.count_nonzero(common)) for common in (common_new_1, common_new_2, common_12)]
        max_common_number = max(common_numbers)
        min_common_number = min(common_numbers)

        if (max_common_number - min_common_number) / max_common_number <= self.settings.triangle_size_tolerance and \
                np.count_nonzero(common_all) >= self.settings.triangle_min_common_fraction * point_number:
            return common_all
        return None
