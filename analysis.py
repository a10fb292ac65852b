import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from scipy.fft import rfft, rfftfreq

# 设置绘图风格
plt.style.use('bmh')


def to_float_channel(samples, num_channels=1, channel=0):
    """交错 int16 → 单声道 float [-1, 1)，供分析/绘图使用"""
    samples = np.asarray(samples)
    usable = len(samples) - len(samples) % num_channels
    return samples[:usable].reshape(-1, num_channels)[:, channel].astype(np.float64) / 32768.0


class AudioAnalyzer:
    @staticmethod
    def calculate_snr(original, processed):
        """
        计算信噪比 (Signal-to-Noise Ratio)
        SNR_dB = 10 * log10(P_signal / P_noise)
        """
        # 确保长度一致，取最短
        min_len = min(len(original), len(processed))
        org = np.asarray(original[:min_len], dtype=np.float64)
        proc = np.asarray(processed[:min_len], dtype=np.float64)

        # 噪声信号 = 原始 - 处理后
        noise = org - proc

        # 计算功率 (信号幅度的平方和)
        p_signal = np.sum(org ** 2)
        p_noise = np.sum(noise ** 2)

        # 防止除以零
        if p_noise < 1e-10: return float('inf')
        if p_signal < 1e-10: return float('-inf')

        return float(10 * np.log10(p_signal / p_noise))

    @staticmethod
    def magnitude_spectrum(y, samplerate):
        """单边幅度谱 (Hz, 幅度)"""
        n = max(len(y), 1)
        return rfftfreq(n, 1 / samplerate), 2.0 / n * np.abs(rfft(y, n))

    @staticmethod
    def plot_comparison(original, processed, samplerate, title="Analysis Result", filename="analysis_output.png",
                        zoom_ms=30):
        """
        上：处理前后的幅度谱叠加
        下：中间 zoom_ms 毫秒的波形，颤音和环形调制的包络在这里最明显
        """
        length = min(len(original), len(processed))
        traces = (
            ("Original Input", np.asarray(original[:length]), 'green'),
            ("Processed Output", np.asarray(processed[:length]), 'red'),
        )

        fig, (spec_ax, wave_ax) = plt.subplots(2, 1, figsize=(12, 10))

        for label, y, color in traces:
            freqs, mags = AudioAnalyzer.magnitude_spectrum(y, samplerate)
            spec_ax.fill_between(freqs, mags, color=color, alpha=0.3, label=label)
        spec_ax.set(title=f"Spectrum: {title}", xlabel="Frequency (Hz)", ylabel="Magnitude")
        spec_ax.legend(loc='upper right')

        span = min(int(zoom_ms / 1000 * samplerate), length)
        start = (length - span) // 2
        t_ms = np.arange(span) / samplerate * 1000
        for label, y, color in traces:
            wave_ax.plot(t_ms, y[start:start + span], color=color, alpha=0.7, label=label)
        wave_ax.set(title=f"Waveform ({zoom_ms}ms)", xlabel="Time (ms)", ylabel="Amplitude", ylim=(-1.1, 1.1))
        wave_ax.legend(loc='upper right')

        fig.tight_layout()
        fig.savefig(filename, dpi=150)
        plt.close(fig)
        print(f"📊 [Analysis] 图表分析已生成: {filename}")
        return filename
