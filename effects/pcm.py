import numpy as np
from .base import AudioEffect


class PCMBitcrusherStyle(AudioEffect):
    """
    手写 PCM 量化 (Bit Crusher)
    step = 2^(16 - bits)，把低位清零：trunc(x / step) * step
    向零截断而不是四舍五入，会带来固定的偏差，这里保持原样
    """
    def __init__(self, bits=8):
        if bits < 0:
            raise ValueError(f"比特深度不能为负: {bits}")
        super().__init__(f"PCM Quantization ({bits}-bit)")
        self.bits = bits

    @property
    def step(self):
        shift = max(16 - min(self.bits, 16), 0)
        return 1 << shift

    def process(self, samples, spec):
        # int64 避免 -32768 之类的边界溢出
        wide = np.asarray(samples, dtype=np.int64)
        step = self.step

        crushed = np.sign(wide) * (np.abs(wide) // step) * step
        return np.clip(crushed, -32768, 32767).astype(np.int16)
