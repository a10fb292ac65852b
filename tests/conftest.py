import numpy as np
import pytest

from effects.base import FormatSpec

SR = 44100


class SequenceRng:
    """按给定顺序吐出随机值的替身，接口与 numpy Generator 的 uniform / integers 一致"""

    def __init__(self, values):
        self.values = list(values)
        self.pos = 0
        self.draws = 0

    def _take(self, size):
        if size is None:
            self.draws += 1
            value = self.values[self.pos]
            self.pos += 1
            return value
        chunk = self.values[self.pos:self.pos + size]
        assert len(chunk) == size, "fake rng exhausted"
        self.pos += size
        self.draws += size
        return np.array(chunk)

    def uniform(self, low=0.0, high=1.0, size=None):
        return self._take(size)

    def integers(self, low, high=None, size=None, endpoint=False):
        return self._take(size)


@pytest.fixture
def spec():
    return FormatSpec(samplerate=SR, num_channels=1)


@pytest.fixture
def loud_buffer():
    """随机采样 + int16 两端的极值"""
    rng = np.random.default_rng(1234)
    body = rng.integers(-32768, 32768, size=4000).astype(np.int16)
    edges = np.array([-32768, -32767, -1, 0, 1, 32766, 32767], dtype=np.int16)
    return np.concatenate([edges, body])


def make_sine(freq=440.0, seconds=0.25, amplitude=0.5, sr=SR):
    t = np.arange(int(sr * seconds)) / sr
    return np.round(np.sin(2 * np.pi * freq * t) * amplitude * 32767).astype(np.int16)
