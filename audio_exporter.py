from pathlib import Path

import numpy as np
from scipy.io import wavfile
from pydub import AudioSegment


class AudioExporter:
    def __init__(self, output_dir="output_audio"):
        """
        初始化导出器
        """
        self.output_dir = Path(output_dir)

    def _ensure_dir(self):
        if not self.output_dir.exists():
            self.output_dir.mkdir(parents=True)

    def write_wav(self, output_path, samples, spec):
        """
        把交错的 int16 采样原样写成 16-bit PCM WAV，采样率 / 声道数沿用输入
        """
        samples = np.asarray(samples, dtype=np.int16)
        channels = spec.num_channels
        if len(samples) % channels != 0:
            raise ValueError(f"采样点数 {len(samples)} 不是声道数 {channels} 的整数倍")

        # 交错 → (frames, channels)；单声道写一维
        frames = samples if channels == 1 else samples.reshape(-1, channels)
        wavfile.write(str(output_path), int(spec.samplerate), frames)

        return str(output_path)

    def export_to_mp3(self, wav_path, bitrate="192k"):
        """
        将 WAV 转码为 MP3 (模拟 Web 下载用的最终格式)
        """
        wav_path = Path(wav_path)
        if not wav_path.exists():
            raise FileNotFoundError(f"找不到要导出的文件: {wav_path}")

        self._ensure_dir()
        print(f"正在进行 MP3 编码 (比特率 {bitrate})...")
        audio = AudioSegment.from_wav(str(wav_path))
        output_path = self.output_dir / f"{wav_path.stem}_processed.mp3"
        audio.export(str(output_path), format="mp3", bitrate=bitrate)
        return str(output_path.absolute())
