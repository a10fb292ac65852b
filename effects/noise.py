import numpy as np
from scipy.signal import lfilter
from .base import AudioEffect
from .normalizer import SAMPLE_MAX, as_float, normalize

# Paul Kellet 粉红噪声滤波器组：(衰减系数, 白噪声增益)
PINK_POLES = (
    (0.99886, 0.0555179),
    (0.99332, 0.0750759),
    (0.96900, 0.1538520),
    (0.86650, 0.3104856),
    (0.55000, 0.5329522),
    (-0.7616, -0.0168980),
)
PINK_DC_OFFSET = 0.5362
PINK_DELAY_OFFSET = 0.115926
PINK_ATTENUATION = 0.11


class PinkNoiseGenerator:
    """
    白噪声 → 粉红噪声 (1/f)
    7 个反馈状态 b0..b6 初始为 0，在一次处理过程中逐点更新
    """

    def __init__(self, rng):
        # rng: 提供 uniform(low, high, size=None) 的随机源 (numpy Generator 或测试替身)
        self.rng = rng
        self.state = np.zeros(7)

    def generate(self):
        """生成下一个粉红噪声值 (约在 [-1, 1] 之间)"""
        white = float(self.rng.uniform(-1.0, 1.0))
        b = self.state
        for k, (decay, gain) in enumerate(PINK_POLES):
            b[k] = decay * b[k] + white * gain

        pink = b[0] + b[1] + b[2] + b[3] + b[4] + b[5] + b[6] + white + PINK_DC_OFFSET
        # b6 保存的是上一个白噪声，下一次才参与求和
        b[6] = white + PINK_DELAY_OFFSET

        return pink * PINK_ATTENUATION

    def generate_block(self, n):
        """
        一次生成 n 个值，结果与连续调用 n 次 generate() 相同
        每一极都是一阶 IIR，用 lfilter 并以当前状态作为初值
        """
        if n == 0:
            return np.zeros(0)

        white = np.asarray(self.rng.uniform(-1.0, 1.0, size=n), dtype=np.float64)
        b = self.state
        terms = np.empty((7, n))

        for k, (decay, gain) in enumerate(PINK_POLES):
            # y[0] = decay * b[k] + gain * white[0]
            terms[k], _ = lfilter([gain], [1.0, -decay], white, zi=[decay * b[k]])

        terms[6, 0] = b[6]
        terms[6, 1:] = white[:-1] + PINK_DELAY_OFFSET

        pink = terms[0] + terms[1] + terms[2] + terms[3] + terms[4] + terms[5] + terms[6] + white + PINK_DC_OFFSET

        b[:6] = terms[:6, -1]
        b[6] = white[-1] + PINK_DELAY_OFFSET

        return pink * PINK_ATTENUATION


class WhiteNoiseStyle(AudioEffect):
    """
    加性白噪声
    每个采样点抽取一次 [-32767, 32767] 的均匀随机整数，乘以 level 后叠加
    """
    def __init__(self, rng, level=0.01):
        super().__init__(f"White Noise (level={level})")
        self.level = level
        self._rng = rng

    def process(self, samples, spec):
        noise = self._rng.integers(-SAMPLE_MAX, SAMPLE_MAX, size=len(samples), endpoint=True)
        mix = as_float(samples) + np.asarray(noise, dtype=np.float64) * self.level
        return normalize(mix)


class PinkNoiseStyle(AudioEffect):
    """
    加性粉红噪声
    每次处理新建一个 PinkNoiseGenerator，滤波器状态贯穿整段音频
    """
    def __init__(self, rng, level=0.05):
        super().__init__(f"Pink Noise (level={level})")
        self.level = level
        self._rng = rng

    def process(self, samples, spec):
        generator = PinkNoiseGenerator(self._rng)
        noise = generator.generate_block(len(samples))
        mix = as_float(samples) + noise * SAMPLE_MAX * self.level
        return normalize(mix)
