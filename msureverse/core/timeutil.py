"""Shared fade-time parsing: seconds, checked to be finite and within bounds."""

import math
import click

from msureverse.core.pcm import SAMPLE_RATE

MAX_FADE_TIME = 600.0


class FadeTimeParam(click.ParamType):
    """Click parameter type for a fade duration in seconds, 0 to MAX_FADE_TIME."""
    name = 'SECONDS'

    def convert(self, value, param, ctx):
        if value is None:
            return None
        try:
            seconds = float(value)
        except (TypeError, ValueError):
            self.fail(f"{value!r} is not a valid number of seconds", param, ctx)
        if not math.isfinite(seconds) or seconds < 0:
            self.fail(f"{value!r} is not a valid fade time; it must be finite and not negative",
                      param, ctx)
        if seconds > MAX_FADE_TIME:
            self.fail(f"{value!r} is a ridiculously long fade time (max {MAX_FADE_TIME:g}s)",
                      param, ctx)
        return seconds


FADE_TIME = FadeTimeParam()


def to_frames(seconds: float, sample_rate: int = SAMPLE_RATE) -> int:
    """Convert seconds to a whole number of frames, rounding half up."""
    return int(math.floor(seconds * sample_rate + 0.5))
