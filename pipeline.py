import numpy as np
from audio_loader import AudioHandler
from audio_exporter import AudioExporter

from effects.noise import WhiteNoiseStyle, PinkNoiseStyle
from effects.distortion import SoftClipDistortion
from effects.tremolo import TremoloStyle
from effects.telephone import TelephoneFilter
from effects.ring_mod import RingModulator
from effects.pcm import PCMBitcrusherStyle


def build_default_chain(rng=None):
    """
    固定的 lo-fi 链路 (顺序和参数都不可配置)
    两个噪声效果共用同一个随机源：先抽完白噪声，再抽粉红噪声
    """
    if rng is None:
        rng = np.random.default_rng()
    return [
        WhiteNoiseStyle(rng, level=0.01),
        PinkNoiseStyle(rng, level=0.05),
        SoftClipDistortion(gain=2.0),
        TremoloStyle(rate_hz=6.0, depth=0.2),
        TelephoneFilter(alpha=0.9),
        RingModulator(frequency_hz=20.0),
        PCMBitcrusherStyle(bits=8),
    ]


class AudioPipeline:
    def __init__(self, effects=None, loader=None, exporter=None):
        if effects is None: effects = build_default_chain()
        self.effects = list(effects)
        self.loader = loader or AudioHandler()
        self.exporter = exporter or AudioExporter()

    def process(self, samples, spec, verbose=True):
        """按顺序逐个应用效果，每个效果完整地处理一遍缓冲区"""
        audio = np.asarray(samples, dtype=np.int16)

        for pass_count, effect in enumerate(self.effects, start=1):
            if verbose:
                print(f"   [{pass_count}] 风格化: {effect.name}")
            audio = effect.process(audio, spec)

        return audio

    def run(self, input_path, output_path):
        print(f"开始处理: {input_path}")

        # 1. 读入
        samples, spec = self.loader.read_wav(input_path)

        # 2. 效果链
        processed = self.process(samples, spec)

        # 3. 写出
        self.exporter.write_wav(output_path, processed, spec)

        print(f"完成: {output_path}")
        return samples, processed, spec
