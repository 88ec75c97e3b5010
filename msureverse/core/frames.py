"""Reverse-order, cyclic access to stereo sample frames."""

import numpy as np

from msureverse.core.pcm import CHANNELS, samples_from_bytes


class ReversedFrames:
    """Frames of a buffer, last to first, repeating without end.

    Position i maps to original frame n - 1 - (i mod n), so walking past the
    original first frame wraps around to the original last frame again. The
    source array is held by reference and never written to.
    """

    def __init__(self, samples: np.ndarray | bytes):
        if isinstance(samples, (bytes, bytearray, memoryview)):
            samples = samples_from_bytes(bytes(samples))
        if samples.ndim != 2 or samples.shape[1] != CHANNELS:
            raise ValueError(f"Expected a (frames, {CHANNELS}) array, got shape {samples.shape}")
        self._samples = samples

    def __len__(self) -> int:
        return self._samples.shape[0]

    def _indices(self, positions: np.ndarray) -> np.ndarray:
        n = len(self)
        if n == 0:
            raise ValueError("Cannot cycle over an empty buffer")
        return n - 1 - positions % n

    def __getitem__(self, i: int) -> np.ndarray:
        return self._samples[int(self._indices(np.asarray(i)))]

    def __iter__(self):
        # a single pass
        return iter(self._samples[::-1])

    def cycle(self):
        i = 0
        while True:
            yield self[i]
            i += 1

    def take(self, start: int, count: int) -> np.ndarray:
        """Frames at cyclic positions start .. start + count, as a (count, 2) array."""
        if count <= 0:
            return self._samples[:0].copy()
        positions = np.arange(start, start + count, dtype=np.int64)
        return self._samples[self._indices(positions)]


def reverse_frames(samples: np.ndarray) -> np.ndarray:
    rf = ReversedFrames(samples)
    return rf.take(0, len(rf))
