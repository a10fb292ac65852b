"""Noise stages and the pink-noise filter bank."""

import numpy as np

from conftest import SequenceRng
from effects.noise import (
    PINK_POLES, PinkNoiseGenerator, PinkNoiseStyle, WhiteNoiseStyle,
)


def white_values(n, seed=7):
    return np.random.default_rng(seed).uniform(-1.0, 1.0, size=n).tolist()


# ---------------------------------------------------------------------------
# PinkNoiseGenerator
# ---------------------------------------------------------------------------
def test_pink_generator_is_deterministic_under_seed():
    a = PinkNoiseGenerator(np.random.default_rng(42))
    b = PinkNoiseGenerator(np.random.default_rng(42))
    run_a = [a.generate() for _ in range(500)]
    run_b = [b.generate() for _ in range(500)]
    assert run_a == run_b


def test_pink_generator_first_two_values_by_hand():
    w0, w1 = 0.5, -0.25
    gen = PinkNoiseGenerator(SequenceRng([w0, w1]))

    total_gain = sum(gain for _, gain in PINK_POLES)
    expected0 = (total_gain * w0 + 0.0 + w0 + 0.5362) * 0.11
    assert np.isclose(gen.generate(), expected0, rtol=0, atol=1e-12)

    terms = [decay * gain * w0 + gain * w1 for decay, gain in PINK_POLES]
    expected1 = (sum(terms) + (w0 + 0.115926) + w1 + 0.5362) * 0.11
    assert np.isclose(gen.generate(), expected1, rtol=0, atol=1e-12)


def test_pink_generator_state_starts_at_zero():
    gen = PinkNoiseGenerator(SequenceRng([0.0]))
    assert not gen.state.any()
    # 白噪声为 0 时只剩直流项
    assert np.isclose(gen.generate(), 0.5362 * 0.11)


def test_pink_block_matches_scalar_calls():
    values = white_values(2000)
    scalar_gen = PinkNoiseGenerator(SequenceRng(values))
    block_gen = PinkNoiseGenerator(SequenceRng(values))

    scalar = np.array([scalar_gen.generate() for _ in range(2000)])
    block = np.concatenate([block_gen.generate_block(700), block_gen.generate_block(1300)])

    assert np.allclose(scalar, block, rtol=0, atol=1e-9)
    assert np.allclose(scalar_gen.state, block_gen.state, rtol=0, atol=1e-9)


def test_pink_block_of_zero_length_draws_nothing():
    rng = SequenceRng([])
    assert len(PinkNoiseGenerator(rng).generate_block(0)) == 0
    assert rng.draws == 0


def test_pink_noise_stays_bounded():
    gen = PinkNoiseGenerator(np.random.default_rng(3))
    noise = gen.generate_block(44100)
    assert np.isfinite(noise).all()
    assert np.abs(noise).max() < 2.0


# ---------------------------------------------------------------------------
# WhiteNoiseStyle
# ---------------------------------------------------------------------------
def test_white_noise_adds_scaled_draws(spec):
    rng = SequenceRng([32767, -32767, 0])
    x = np.array([0, 100, -100], dtype=np.int16)
    out = WhiteNoiseStyle(rng, level=0.01).process(x, spec)
    # 327.67 → 327, 100 - 327.67 → -227
    assert out.tolist() == [327, -227, -100]
    assert rng.draws == 3


def test_white_noise_draws_full_symmetric_range():
    class RecordingRng:
        def integers(self, low, high=None, size=None, endpoint=False):
            self.args = (low, high, size, endpoint)
            return np.zeros(size, dtype=np.int64)

    rng = RecordingRng()
    WhiteNoiseStyle(rng).process(np.zeros(10, dtype=np.int16), None)
    assert rng.args == (-32767, 32767, 10, True)


def test_white_noise_output_in_range(loud_buffer, spec):
    out = WhiteNoiseStyle(np.random.default_rng(0), level=0.5).process(loud_buffer, spec)
    assert len(out) == len(loud_buffer)
    assert out.min() >= -32767 and out.max() <= 32767


# ---------------------------------------------------------------------------
# PinkNoiseStyle
# ---------------------------------------------------------------------------
def test_pink_noise_stage_output_in_range(loud_buffer, spec):
    out = PinkNoiseStyle(np.random.default_rng(0), level=1.0).process(loud_buffer, spec)
    assert len(out) == len(loud_buffer)
    assert out.min() >= -32767 and out.max() <= 32767


def test_pink_noise_stage_restarts_filter_each_pass(spec):
    values = white_values(256)
    effect = PinkNoiseStyle(SequenceRng(values + values), level=0.05)
    x = np.zeros(256, dtype=np.int16)
    first = effect.process(x, spec)
    second = effect.process(x, spec)
    assert (first == second).all()


def test_pink_noise_stage_matches_generator(spec):
    values = white_values(64)
    x = np.arange(64, dtype=np.int16) * 100
    out = PinkNoiseStyle(SequenceRng(values), level=0.05).process(x, spec)

    gen = PinkNoiseGenerator(SequenceRng(values))
    expected = [np.trunc(s + gen.generate() * 32767 * 0.05) for s in x.astype(float)]
    assert np.abs(out - np.array(expected)).max() <= 1


def test_noise_stages_share_one_ordered_stream(spec):
    x = np.zeros(100, dtype=np.int16)

    rng = np.random.default_rng(99)
    white_out = WhiteNoiseStyle(rng).process(x, spec)
    pink_out = PinkNoiseStyle(rng).process(white_out, spec)

    replay = np.random.default_rng(99)
    replay.integers(-32767, 32767, size=100, endpoint=True)
    gen = PinkNoiseGenerator(replay)
    expected_noise = gen.generate_block(100) * 32767 * 0.05

    assert np.abs(pink_out - (white_out + expected_noise)).max() <= 1
