class RansacMonitor:
    """ RANSAC 执行过程的监视器

    每次抽取最小样本并拟合后调用 modelFromMinimalSampleSet；一致集超过目前最佳时调用
    modelRefit；结束时调用 success。所有方法默认为空实现，子类只需重写需要的方法。

    监视器不得修改传入的对象，也不得修改估计器的状态；传入的 ElementSet 只在回调期间有效。
    """

    def modelFromMinimalSampleSet(self, samples, model):
        """ 每次抽取最小样本并拟合后调用

        参数
        ----------
        samples : ElementSet
            最小样本
        model : object
            拟合器返回的模型，可能为 None
        """
        pass

    def modelRefit(self, model, inliers, refit_model):
        """ 找到更大的一致集时调用

        参数
        ----------
        model : object
            最小样本拟合的模型
        inliers : ElementSet
            一致集
        refit_model : object
            用一致集重新拟合的模型；一致集仍为最小样本时与 model 相同，拟合失败时为 None
        """
        pass

    def success(self, model, inliers):
        """ 估计成功结束、即将返回模型时调用

        参数
        ----------
        model : object
            返回的模型
        inliers : ElementSet
            最终模型的内点
        """
        pass
