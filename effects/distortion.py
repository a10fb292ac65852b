import numpy as np
from .base import AudioEffect
from .normalizer import SAMPLE_MAX, as_float, normalize


class SoftClipDistortion(AudioEffect):
    """
    tanh 软削波失真
    先放大 gain 倍，归一化到 [-1, 1] 附近后过 tanh，再还原到采样幅度
    大信号被平滑压缩，而不是硬切
    """
    def __init__(self, gain=2.0):
        super().__init__(f"Soft Clip Distortion (gain={gain})")
        self.gain = gain

    def process(self, samples, spec):
        amplified = as_float(samples) * self.gain
        distorted = np.tanh(amplified / SAMPLE_MAX) * SAMPLE_MAX
        return normalize(distorted)
