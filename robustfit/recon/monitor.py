class ReconMonitor:
    """ RECON 执行过程的监视器

    算法不断抽取最小样本并拟合模型，每次都会调用 modelFromMinimalSampleSet。新模型随后与之前的
    每个模型检查 alpha 一致性，一致时调用 modelPairConsistent，否则调用 modelPairNotConsistent。
    找到三个相互一致的模型后调用 success，内点为三者的公共数据。

    所有方法默认为空实现，子类只需重写需要的方法。监视器不得修改传入的对象。
    """

    def modelFromMinimalSampleSet(self, samples, model):
        """ 每个最小样本及拟合器从中得到的模型（可能为 None） """
        pass

    def modelPairConsistent(self, new_model, existing_model, consistent_data):
        """ 新模型与已有模型一致

        参数
        ----------
        new_model : object
            新模型
        existing_model : object
            与新模型一致的已有模型
        consistent_data : ElementSet
            两模型的公共内点
        """
        pass

    def modelPairNotConsistent(self, new_model, existing_model):
        """ 新模型与已有模型不一致 """
        pass

    def success(self, model, inliers):
        """ 估计成功结束、即将返回模型时调用 """
        pass
