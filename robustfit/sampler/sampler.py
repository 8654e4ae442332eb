class Sampler:
    """ 采样器基类 """

    def sample(self, point_number, sample_size):
        """ 从 [0, point_number) 的数据序号中进行采样

        参数
        ----------
        point_number : int
            数据集合的点数目
        sample_size : int
            采样的样本数

        返回
        ----------
        list
            采样的数据集合序号列表
        """
        raise NotImplementedError
