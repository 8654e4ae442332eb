import logging
import random

import matplotlib.pyplot as plt
import numpy as np

from robustfit import NoConsensusFoundError
from robustfit import ransac as rc
from robustfit import recon as rn
from robustfit.utils import setup_logger


def make_line_points(inlier_number=120, outlier_number=80, noise=0.05, seed=7):
    """ 生成 y = 0.5 * x + 1 附近的点和均匀分布的外点 """
    rng = np.random.default_rng(seed)
    x = rng.uniform(-5, 5, inlier_number)
    y = 0.5 * x + 1 + rng.normal(0, noise, inlier_number)
    outliers = rng.uniform(-5, 5, (outlier_number, 2))
    return np.r_[np.c_[x, y], outliers]


def draw_line(ax, line, color, label):
    a, b, c = line.descriptor
    xs = np.array([-5.0, 5.0])
    ax.plot(xs, -(a * xs + c) / b, color=color, label=label)


if __name__ == "__main__":
    setup_logger('robustfit', logging.INFO)
    points = make_line_points()

    ransac_line, ransac_mask = rc.findLine(points, threshold=0.15, random=random.Random(1))
    print('RANSAC')
    print('Inliers Number = ', int(ransac_mask.sum()), '\n')
    results = [(ransac_line, ransac_mask, 'ransac')]

    try:
        recon_line, recon_mask = rn.findLine(points, random=random.Random(1))
        print('RECON')
        print('Inliers Number = ', int(recon_mask.sum()), '\n')
        results.append((recon_line, recon_mask, 'recon'))
    except NoConsensusFoundError:
        print('RECON')
        print('No consensus found', '\n')

    # 绘制算法结果图
    fig, axes = plt.subplots(1, len(results), figsize=(6 * len(results), 5), squeeze=False)
    for ax, (line, mask, title) in zip(axes[0], results):
        ax.scatter(points[mask == 0, 0], points[mask == 0, 1], s=8, c='gray', label='outliers')
        ax.scatter(points[mask == 1, 0], points[mask == 1, 1], s=8, c='green', label='inliers')
        draw_line(ax, line, 'red', 'model')
        ax.set_title(title)
        ax.legend()
    plt.show()
