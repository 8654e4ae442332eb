import random


class UniformRandomGenerator:
    """ 均匀随机数产生器 """

    def __init__(self, random_stream=None):
        self.range_min = 0       # 可取最小值
        self.range_max = 0       # 可取最大值，采样前由 resetGenerator 设置
        # 唯一的随机源，传入相同种子的 random.Random 可复现采样过程
        self.random_stream = random_stream if random_stream is not None else random.Random()

    def resetGenerator(self, min, max):
        """ 设置随机数发生器的随机数范围

        参数
        ----------
        min : int
            可取最小值
        max : int
            可取最大值
        """
        self.range_min, self.range_max = min, max

    def generateUniqueRandomSet(self, sample_size, max=None):
        """ 产生一个均匀随机的不重复随机数序列

        参数
        ----------
        sample_size : int
            选取样本大小
        max : int 可选
            可取最大值

        返回
        ----------
        list
            产生的随机序列样本列表，按抽取顺序排列
        """
        # 如果输入了最大值，则重设随机数发生器范围
        if max is not None:
            self.resetGenerator(0, max)
        picked = set()
        sample = []
        while len(sample) < sample_size:
            rand_num = self.__getRandomNumber()
            # 如果产生的数不和前面重复，则加入样本
            if rand_num in picked:
                continue
            picked.add(rand_num)
            sample.append(rand_num)
        return sample

    def __getRandomNumber(self):
        """ 产生一个 [range_min, range_max] 内的均匀随机整数 """
        return self.random_stream.randint(self.range_min, self.range_max)
