"""Shared fixtures for msureverse tests."""

import numpy as np
import pytest

from msureverse.core.pcm import PcmData, SAMPLE_DTYPE, save


def _ramp(frames: int) -> np.ndarray:
    """Distinct, easily traced stereo frames: left = i, right = -i - 1."""
    i = np.arange(frames, dtype=np.int64)
    return np.stack([i, -i - 1], axis=1).astype(SAMPLE_DTYPE)


def _sine(frames: int, freq: float = 440.0) -> np.ndarray:
    t = np.arange(frames) / 44100
    left = 0.5 * np.sin(2 * np.pi * freq * t)
    right = 0.5 * np.sin(2 * np.pi * freq * 2 * t)
    return np.rint(np.stack([left, right], axis=1) * 32767).astype(SAMPLE_DTYPE)


class ZeroDither:
    """Stand-in generator whose dither is always zero."""

    def integers(self, low, high, size=None, endpoint=False):
        return np.zeros(size, dtype=np.int64)


@pytest.fixture
def zero_dither():
    return ZeroDither()


@pytest.fixture
def ramp_samples() -> np.ndarray:
    return _ramp(20)


@pytest.fixture
def unlooped_pcm(ramp_samples) -> PcmData:
    return PcmData(ramp_samples, None)


@pytest.fixture
def looped_pcm(ramp_samples) -> PcmData:
    return PcmData(ramp_samples, 5)


@pytest.fixture
def sine_pcm() -> PcmData:
    return PcmData(_sine(44100), 4410)


@pytest.fixture
def pcm_file(looped_pcm, tmp_path):
    p = tmp_path / "track-1.pcm"
    save(looped_pcm, p)
    return p


@pytest.fixture
def unlooped_file(unlooped_pcm, tmp_path):
    p = tmp_path / "track-2.pcm"
    save(unlooped_pcm, p)
    return p
