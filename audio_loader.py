from pathlib import Path
import time

import numpy as np
from pedalboard.io import AudioFile
from pydub import AudioSegment
from scipy.io import wavfile

from effects.base import FormatSpec


class FormatError(ValueError):
    """音频容器损坏 / 不支持 / 采样数据无法解码"""


class AudioHandler:
    def __init__(self, temp_dir="temp_audio"):
        """
        初始化音频处理器
        """
        self.temp_dir = Path(temp_dir)

    def _ensure_dir(self):
        """确保临时目录存在"""
        if not self.temp_dir.exists():
            self.temp_dir.mkdir(parents=True)

    def read_wav(self, input_path):
        """
        读取 WAV，返回 (int16 采样数组, FormatSpec)
        多声道按帧交错展开成一维
        """
        input_path = Path(input_path)
        if not input_path.exists():
            raise FileNotFoundError(f"找不到文件: {input_path}")

        # 16-bit PCM 直接按整数读，采样值原样交给效果链
        try:
            samplerate, data = wavfile.read(str(input_path))
        except ValueError:
            data = None

        if data is None or data.dtype != np.int16:
            return self._read_converted(input_path)

        num_channels = 1 if data.ndim == 1 else data.shape[1]
        spec = FormatSpec(samplerate=int(samplerate), num_channels=num_channels, file_dtype="int16")
        # (frames, channels) 按行展开就是交错排列
        return np.ascontiguousarray(data).reshape(-1), spec

    def _read_converted(self, input_path):
        """24-bit / float / 8-bit 等其他编码：pedalboard 解码后转成 int16"""
        try:
            with AudioFile(str(input_path)) as f:
                # (channels, frames) float32，范围 [-1, 1]
                audio = f.read(f.frames)
                spec = FormatSpec(
                    samplerate=int(f.samplerate),
                    num_channels=int(f.num_channels),
                    file_dtype=str(f.file_dtype),
                )
        except (ValueError, RuntimeError) as e:
            raise FormatError(f"无法解析音频文件 {input_path.name}: {e}") from e

        scaled = np.rint(np.asarray(audio, dtype=np.float64) * 32768.0)
        samples = np.clip(scaled, -32768, 32767).astype(np.int16)

        return samples.T.reshape(-1), spec

    def convert_mp3_to_wav(self, input_path):
        """
        接收 MP3 (或其他 ffmpeg 支持的格式) 文件路径，将其转换为 16-bit WAV
        生成的是临时文件，用完交给 remove_temp() 删除
        """
        input_path = Path(input_path)

        # 1. 基础校验
        if not input_path.exists():
            raise FileNotFoundError(f"找不到文件: {input_path}")

        if input_path.suffix.lower() != '.mp3':
            print(f"警告: 输入文件 {input_path.name} 可能不是 MP3，尝试强制读取...")

        print(f"正在处理: {input_path.name} ...")
        self._ensure_dir()

        try:
            # 2. 使用 pydub 加载音频，统一成 16-bit
            audio = AudioSegment.from_file(str(input_path)).set_sample_width(2)

            # 3. 准备输出路径
            timestamp = int(time.time())
            output_path = self.temp_dir / f"{input_path.stem}_{timestamp}.wav"

            # 4. 导出为 WAV
            audio.export(str(output_path), format="wav")

        except Exception as e:
            raise FormatError(f"音频转换失败: {e}") from e

        print(f"转换成功: {output_path}")
        return str(output_path.absolute())

    def remove_temp(self, path):
        """删除转换产生的临时 WAV"""
        Path(path).unlink(missing_ok=True)
