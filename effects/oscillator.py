import numpy as np

TWO_PI = 2.0 * np.pi


class PhaseAccumulator:
    """
    相位累加器：从 0 开始，每个采样点加 2π·f/fs，超过 2π 时减去 2π
    Tremolo 和 RingModulator 各自持有一个，互不共享
    """

    def __init__(self, frequency, samplerate):
        if samplerate <= 0:
            raise ValueError(f"采样率必须为正数: {samplerate}")
        self.increment = TWO_PI * frequency / samplerate
        self.phase = 0.0

    def advance(self):
        """
        返回当前相位，然后前进一步 (加 increment，超过 2π 减 2π)
        这是逐点的参考定义，效果器用的 block() 必须与之一致
        """
        current = self.phase
        self.phase += self.increment
        if self.phase > TWO_PI:
            self.phase -= TWO_PI
        return current

    def block(self, n):
        """
        一次取出 n 个相位 (与逐点 advance() 等价)
        先算好整段相位序列，再由效果器批量使用
        """
        phases = np.mod(self.phase + self.increment * np.arange(n), TWO_PI)
        self.phase = float(np.mod(self.phase + self.increment * n, TWO_PI))
        return phases
