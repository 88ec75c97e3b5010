"""msu-info: Display information about an MSU-1 .pcm file."""

import json
import click
from msureverse.core.pcm import SAMPLE_RATE, load_input


@click.command()
@click.argument('input', default=None, required=False)
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
def main(input, as_json):
    """Display information about an MSU-1 .pcm file.

    INPUT may be a file path, '-' for stdin, or omitted when stdin is a pipe.
    """
    try:
        pcm = load_input(input)
    except ValueError as e:
        raise click.ClickException(str(e))
    except OSError as e:
        raise click.FileError(input, hint=e.strerror)

    if as_json:
        print(json.dumps({
            'sample_rate': SAMPLE_RATE,
            'channels': pcm.channels,
            'frames': pcm.frames,
            'duration': pcm.duration,
            'loop_point': pcm.loop_point,
        }))
        return

    print(f"Format      : MSU-1 PCM")
    print(f"Sample rate : {SAMPLE_RATE} Hz")
    print(f"Channels    : {pcm.channels}")
    print(f"Frames      : {pcm.frames}")
    print(f"Duration    : {pcm.duration:.3f} s")
    if pcm.loop_point is None:
        print(f"Loop point  : none")
    else:
        print(f"Loop point  : {pcm.loop_point} ({pcm.loop_point / SAMPLE_RATE:.3f} s)")
        if pcm.loop_point > pcm.frames:
            print(f"              (past the end of the audio)")
