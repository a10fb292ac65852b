import numpy as np
from .base import AudioEffect
from .normalizer import as_float, normalize
from .oscillator import PhaseAccumulator


class TremoloStyle(AudioEffect):
    """
    颤音 (Tremolo)：用正弦 LFO 对幅度做调制
    lfo ∈ [0, 1]，调制系数 = 1 - depth * (1 - lfo)，范围 [1-depth, 1]
    """
    def __init__(self, rate_hz=6.0, depth=0.2):
        super().__init__(f"Tremolo ({rate_hz}Hz, depth={depth})")
        self.rate_hz = rate_hz
        self.depth = depth

    def process(self, samples, spec):
        oscillator = PhaseAccumulator(self.rate_hz, spec.samplerate)
        phases = oscillator.block(len(samples))

        lfo = (np.sin(phases) + 1.0) / 2.0
        modulation = 1.0 - self.depth * (1.0 - lfo)

        return normalize(as_float(samples) * modulation)
