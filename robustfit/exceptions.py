class NoModelFoundError(Exception):
    """ 鲁棒估计器未能求得模型时抛出的异常基类 """
    pass


class NotEnoughDataError(NoModelFoundError):
    """ 数据点数目少于拟合器所需的最小样本数 """
    pass


class ModelFitFailureLimitExceededError(NoModelFoundError):
    """ 拟合器从最小样本拟合模型失败的次数达到上限 """
    pass


class NoConsensusFoundError(NoModelFoundError):
    """ RECON 达到最大尝试次数，仍未找到三个相互一致的模型 """
    pass
