"""
Core MSU-1 PCM I/O: load, save, and pipe audio data.

All tools work with PcmData, a numpy int16 array (frames x 2) holding the raw
stereo samples plus the loop point from the header. Samples are kept as the
little-endian integers found in the file, so samples.tobytes() reproduces the
payload byte for byte.

File format (also used verbatim on stdin/stdout):
  - Header: 8 bytes
      bytes 0-3:  magic b'MSU1'
      bytes 4-7:  loop point in frames (uint32 little-endian)  0 = no loop
  - Body: int16 little-endian samples, interleaved left/right, 44100 Hz
"""

import sys
import struct
import numpy as np
from dataclasses import dataclass
from pathlib import Path

MAGIC = b'MSU1'
HEADER_FMT = '<4sI'
HEADER_SIZE = struct.calcsize(HEADER_FMT)  # 8 bytes
SAMPLE_RATE = 44100
CHANNELS = 2
FRAME_SIZE = CHANNELS * 2  # bytes per stereo frame
SAMPLE_DTYPE = np.dtype('<i2')


@dataclass
class PcmData:
    samples: np.ndarray   # shape: (frames, 2), dtype <i2
    loop_point: int | None = None

    @property
    def channels(self) -> int:
        return CHANNELS

    @property
    def frames(self) -> int:
        return self.samples.shape[0]

    @property
    def duration(self) -> float:
        return self.frames / SAMPLE_RATE

    @property
    def loop_samples(self) -> np.ndarray:
        """Samples from the loop point onward (all samples when there is no loop)."""
        if self.loop_point is None:
            return self.samples
        if self.loop_point > self.frames:
            raise ValueError(
                f"Loop point {self.loop_point} is past the end of the audio ({self.frames} frames)"
            )
        return self.samples[self.loop_point:]


def header_bytes(loop_point: int | None) -> bytes:
    return struct.pack(HEADER_FMT, MAGIC, loop_point or 0)


def samples_from_bytes(raw: bytes) -> np.ndarray:
    """Split a raw payload into stereo frames. The length must be a multiple of 4."""
    if len(raw) % FRAME_SIZE != 0:
        raise ValueError(
            f"Corrupt payload: {len(raw)} bytes is not a whole number of "
            f"{FRAME_SIZE}-byte frames (truncated file or extra data appended)"
        )
    return np.frombuffer(raw, dtype=SAMPLE_DTYPE).reshape(-1, CHANNELS)


def read_stream(stream) -> PcmData:
    """Read PcmData from a binary stream, validating the header and payload."""
    header = stream.read(HEADER_SIZE)
    if len(header) < HEADER_SIZE:
        raise ValueError("Incomplete MSU-1 header")
    magic, loop_point = struct.unpack(HEADER_FMT, header)
    if magic != MAGIC:
        raise ValueError(f"Not an MSU-1 PCM file (magic={magic!r}, expected {MAGIC!r})")
    samples = samples_from_bytes(stream.read())
    return PcmData(samples, loop_point or None)


def write_stream(pcm: PcmData, stream) -> None:
    stream.write(header_bytes(pcm.loop_point))
    stream.write(np.ascontiguousarray(pcm.samples, dtype=SAMPLE_DTYPE).tobytes())
    stream.flush()


def load(path: str | Path) -> PcmData:
    with open(path, 'rb') as f:
        return read_stream(f)


def save(pcm: PcmData, path: str | Path) -> None:
    with open(path, 'wb') as f:
        write_stream(pcm, f)


def is_pipe(stream) -> bool:
    """Return True if the stream is a pipe/non-interactive."""
    return not stream.isatty()


def load_input(path: str | None) -> PcmData:
    """
    Load a .pcm file from a path, or from stdin if path is '-' or stdin is a pipe.
    """
    if path == '-' or (path is None and is_pipe(sys.stdin)):
        return read_stream(sys.stdin.buffer)
    if path is None:
        raise ValueError("No input: provide a file path or pipe a .pcm file via stdin")
    return load(path)


def save_output(pcm: PcmData, path: str | None) -> None:
    """
    Save to a file path, or to stdout if path is '-' or stdout is a pipe.
    """
    if path == '-' or (path is None and is_pipe(sys.stdout)):
        write_stream(pcm, sys.stdout.buffer)
        return
    if path is None:
        raise ValueError("No output: provide a file path or pipe via stdout")
    save(pcm, path)
