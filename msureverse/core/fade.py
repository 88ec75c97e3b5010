"""
Reversal with a synthesized fade-in.

A looping track has no natural beginning once reversed, so the reversed
stream opens on an exponential (linear in dB) fade-in. Gain is fixed point:
a multiplier in (0, 65536) applied as (sample * gain + dither) >> 16. The
shift rounds toward negative infinity; uniform dither of half a bit on
either side decorrelates that quantization error from the signal.

Tracks without a loop point are a one-shot recording and are reversed
as-is, with no fade and no dither.
"""

import numpy as np

from msureverse.core.frames import ReversedFrames, reverse_frames
from msureverse.core.pcm import PcmData, SAMPLE_DTYPE

# Natural logarithm of the quietest volume considered audible.
SILENT_LOG = -6.0
GAIN_SHIFT = 16
GAIN_SCALE = 1 << GAIN_SHIFT
# Half a bit of dither at the post-shift scale; both bounds inclusive.
DITHER = 32768
# Frames processed per pass while fading and copying.
BLOCK_FRAMES = 1 << 16


def fade_envelope(fade_samples: int, count: int | None = None, start: int = 0) -> np.ndarray:
    """Fixed-point gains for `count` frames of a `fade_samples` fade, from frame `start`.

    The remaining-frame count runs from fade_samples down, so gain rises from
    exp(SILENT_LOG) * 65536 toward (but never reaching) 65536. Computed in
    float32 and truncated to int32.
    """
    if count is None:
        count = fade_samples - start
    if fade_samples <= 0 or count <= 0:
        return np.zeros(0, dtype=np.int32)
    # integer range first; a float32 arange loses its step above 2**24
    fade_rem = np.arange(fade_samples - start, fade_samples - start - count, -1).astype(np.float32)
    gain = np.exp(np.float32(SILENT_LOG) * fade_rem / np.float32(fade_samples))
    return (gain * np.float32(GAIN_SCALE)).astype(np.int32)


def apply_fade(frames: np.ndarray, gains: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """Scale and dither (frames, 2) samples by per-frame fixed-point gains."""
    left = frames[:, 0].astype(np.int64)
    # Right is decoded from the left half too; existing output depends on it.
    source = np.stack([left, left], axis=1)
    dither = rng.integers(-DITHER, DITHER, size=source.shape, endpoint=True)
    scaled = (source * gains.astype(np.int64)[:, np.newaxis] + dither) >> GAIN_SHIFT
    # wraps to 16 bits
    return scaled.astype(SAMPLE_DTYPE)


def synthesize_fade_in(samples: np.ndarray, fade_samples: int,
                       rng: np.random.Generator | None = None,
                       lead_in: bool = False) -> np.ndarray:
    """Reverse `samples` cyclically, fading in over the first `fade_samples` frames.

    By default exactly len(samples) frames come out; a fade longer than the
    buffer covers all of it. With lead_in, fade_samples extra frames are
    borrowed from the end of the reversed loop and placed ahead of one full
    unmodified reversed pass, so the loop restarts at frame fade_samples.
    Work is done BLOCK_FRAMES at a time so temporaries stay small.
    """
    frames = ReversedFrames(samples)
    n = len(frames)
    if n == 0:
        return samples[:0].copy()
    if rng is None:
        rng = np.random.default_rng()

    total = fade_samples + n if lead_in else n
    faded = min(fade_samples, total)
    out = np.empty((total, 2), dtype=SAMPLE_DTYPE)
    for start in range(0, faded, BLOCK_FRAMES):
        count = min(BLOCK_FRAMES, faded - start)
        gains = fade_envelope(fade_samples, count, start=start)
        out[start:start + count] = apply_fade(frames.take(start, count), gains, rng)
    for start in range(faded, total, BLOCK_FRAMES):
        count = min(BLOCK_FRAMES, total - start)
        out[start:start + count] = frames.take(start, count)
    return out


def reverse_pcm(pcm: PcmData, fade_samples: int,
                rng: np.random.Generator | None = None,
                lead_in: bool = False) -> PcmData:
    """Reverse a track. Looped tracks lose their intro and gain a fade-in.

    The output header's loop field carries fade_samples for looped input and
    0 otherwise.
    """
    if pcm.loop_point is None:
        return PcmData(reverse_frames(pcm.samples), None)
    samples = synthesize_fade_in(pcm.loop_samples, fade_samples, rng=rng, lead_in=lead_in)
    return PcmData(samples, fade_samples or None)
