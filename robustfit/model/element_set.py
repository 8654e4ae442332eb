import numpy as np


class ElementSet:
    """ 数据点集合的只读子集视图，只通过序号引用数据点

    可以用下面的循环按升序遍历集合中的序号：

        i = es.nextElement(0)
        while i >= 0:
            ...
            i = es.nextElement(i + 1)
    """

    def __init__(self, point_number):
        self.point_number = point_number   # 数据集合的点数目，即合法序号的范围

    def size(self):
        """ 集合中的元素数目 """
        raise NotImplementedError

    def contains(self, index):
        """ 判断序号为 index 的数据点是否属于该集合

        参数
        ----------
        index : int
            数据点序号

        返回
        ----------
        bool
            是否属于该集合

        异常
        ----------
        IndexError
            index 不在 [0, point_number) 范围内
        """
        raise NotImplementedError

    def nextElement(self, from_index):
        """ 返回集合中不小于 from_index 的最小序号，不存在时返回 -1

        参数
        ----------
        from_index : int
            开始检查的序号（包含）

        返回
        ----------
        int
            下一个元素的序号，或 -1

        异常
        ----------
        IndexError
            from_index 为负数
        """
        raise NotImplementedError

    def toMask(self):
        """ 返回集合对应的 bool 掩码（新的数组） """
        mask = np.zeros(self.point_number, dtype=bool)
        mask[list(self)] = True
        return mask

    def _checkIndex(self, index):
        if index < 0 or index >= self.point_number:
            raise IndexError(f"Invalid index: {index}")

    def __len__(self):
        return self.size()

    def __contains__(self, index):
        return self.contains(index)

    def __iter__(self):
        index = self.nextElement(0)
        while index >= 0:
            yield index
            index = self.nextElement(index + 1)


class FullElementSet(ElementSet):
    """ 包含全部序号 0..n-1 的集合 """

    def size(self):
        return self.point_number

    def contains(self, index):
        self._checkIndex(index)
        return True

    def nextElement(self, from_index):
        if from_index < 0:
            raise IndexError(f"Negative index: {from_index}")
        return from_index if from_index < self.point_number else -1

    def toMask(self):
        return np.ones(self.point_number, dtype=bool)


class MaskElementSet(ElementSet):
    """ 由 bool 掩码表示的序号子集

    掩码以只读视图保存，不复制数据；视图只在一次监视器回调期间有效。
    """

    def __init__(self, mask):
        mask = np.asarray(mask, dtype=bool)
        super().__init__(mask.shape[0])
        self.mask = mask.view()
        self.mask.flags.writeable = False

    def size(self):
        return int(np.count_nonzero(self.mask))

    def contains(self, index):
        self._checkIndex(index)
        return bool(self.mask[index])

    def nextElement(self, from_index):
        if from_index < 0:
            raise IndexError(f"Negative index: {from_index}")
        following = self.mask[from_index:]
        if len(following) == 0:
            return -1
        # bool 数组的 argmax 在第一个 True 处停止扫描
        offset = int(np.argmax(following))
        if not following[offset]:
            return -1
        return from_index + offset

    def toMask(self):
        return self.mask.copy()

    def __iter__(self):
        return iter(np.flatnonzero(self.mask).tolist())
