import numpy as np

# 对称范围：下限取 -32767 而不是 int16 的 -32768
SAMPLE_MAX = 32767
SAMPLE_MIN = -SAMPLE_MAX


def normalize(values):
    """
    float → int16 采样点：先截幅到 [-32767, 32767]，再向零截断
    NaN 视为 0，±inf 截到边界
    """
    values = np.nan_to_num(np.asarray(values, dtype=np.float64),
                           nan=0.0, posinf=SAMPLE_MAX, neginf=SAMPLE_MIN)
    clipped = np.clip(values, SAMPLE_MIN, SAMPLE_MAX)
    return np.trunc(clipped).astype(np.int16)


def as_float(samples):
    """int16 → float64，后续运算不会溢出"""
    return np.asarray(samples, dtype=np.float64)
