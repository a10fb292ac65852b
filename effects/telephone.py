import numpy as np
from .base import AudioEffect
from .normalizer import as_float, normalize

# 高通之后的固定增益
TELEPHONE_BOOST = 1.5


class TelephoneFilter(AudioEffect):
    """
    电话音色：一阶高通 y[n] = (x[n] - alpha * x[n-1]) * 1.5
    x[n-1] 是上一个 *原始* 采样点 (不是滤波后的输出)，起始为 0
    """
    def __init__(self, alpha=0.9):
        super().__init__(f"Telephone Filter (alpha={alpha})")
        self.alpha = alpha

    def process(self, samples, spec):
        original = as_float(samples)
        if len(original) == 0:
            return normalize(original)

        previous = np.empty_like(original)
        previous[0] = 0.0
        previous[1:] = original[:-1]

        high_passed = original - self.alpha * previous
        return normalize(high_passed * TELEPHONE_BOOST)
