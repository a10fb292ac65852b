import numpy as np
from .base import AudioEffect
from .normalizer import as_float, normalize
from .oscillator import PhaseAccumulator


class RingModulator(AudioEffect):
    """
    环形调制：直接乘以正弦载波，没有直流偏置
    信号会被反复拉过零点，产生金属感 / 机器人声
    """
    def __init__(self, frequency_hz=20.0):
        super().__init__(f"Ring Modulator ({frequency_hz}Hz)")
        self.frequency_hz = frequency_hz

    def process(self, samples, spec):
        # 相位从 0 开始，所以第一个采样点一定输出 0
        carrier = np.sin(PhaseAccumulator(self.frequency_hz, spec.samplerate).block(len(samples)))
        return normalize(as_float(samples) * carrier)
