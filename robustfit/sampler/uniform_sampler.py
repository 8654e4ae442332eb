from .sampler import Sampler
from robustfit.utils.uniform_random_generator import UniformRandomGenerator


class UniformSampler(Sampler):
    """ 均匀随机采样器 """

    def __init__(self, random_stream=None):
        super().__init__()
        self.random_generator = UniformRandomGenerator(random_stream)

    def setRandom(self, random_stream):
        """ 替换采样使用的随机源 """
        self.random_generator.random_stream = random_stream

    def sample(self, point_number, sample_size):
        """ 从 [0, point_number) 中均匀随机地选取 sample_size 个不同的序号

        参数
        ----------
        point_number : int
            数据集合的点数目
        sample_size : int
            采样的样本数

        返回
        ----------
        list
            采样的数据集合序号列表；样本数大于点数时返回空列表
        """
        if sample_size > point_number:
            return []
        return self.random_generator.generateUniqueRandomSet(sample_size, max=point_number - 1)
