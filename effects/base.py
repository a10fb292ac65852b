from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class FormatSpec:
    """
    音频格式信息：读入时确定一次，原样传给写出端
    效果器只读不改 (Tremolo / RingModulator 需要采样率做时间基准)
    """
    samplerate: int
    num_channels: int = 1
    file_dtype: str = "int16"


class AudioEffect(ABC):
    """Effect Interface"""
    def __init__(self, name="Unknown Effect"):
        self.name = name

    @abstractmethod
    def process(self, samples, spec):
        """
        :param samples: 一维 int16 数组 (多声道为交错排列)
        :param spec: FormatSpec
        :return: 等长的 int16 数组
        """
        pass

    def get_params(self):
        """获取效果器参数（便于调试/打印链路）"""
        return {key: value for key, value in vars(self).items()
                if key != "name" and not key.startswith("_")}
