"""msu-reverse: Reverse an MSU-1 .pcm track, fading in where it used to loop."""

import click
from pathlib import Path
from msureverse.core.pcm import load_input, save_output
from msureverse.core.fade import reverse_pcm
from msureverse.core.timeutil import FADE_TIME, to_frames


@click.command()
@click.argument('input', default=None, required=False)
@click.argument('output', default=None, required=False)
@click.option('--fade-time', '-f', 'fade_time', default=3.0, type=FADE_TIME, show_default=True,
              help='Seconds of fade-in (ignored for tracks with a zero loop point).')
@click.option('--lead-in', is_flag=True,
              help='Put the fade ahead of one full reversed loop instead of over its start.')
def main(input, output, fade_time, lead_in):
    """Reverse an MSU-1 .pcm track.

    Information is lost: any intro before the loop point is dropped, and a
    looped track opens on a fade-in. The output's loop field holds the fade
    length in frames (0 for tracks that did not loop).

    \b
    INPUT   Source .pcm file or '-' for stdin pipe.
    OUTPUT  Destination .pcm file or '-' for stdout pipe.
            Defaults to INPUT with '_rev' suffix.

    \b
    Examples:
      msu-reverse track-1.pcm track-1_rev.pcm
      msu-reverse --fade-time 5 track-2.pcm
      cat track-3.pcm | msu-reverse - - > reversed.pcm
    """
    fade_samples = to_frames(fade_time)

    # ------------------------------------------------------------------ load
    try:
        pcm = load_input(input)
    except ValueError as e:
        raise click.ClickException(str(e))
    except OSError as e:
        raise click.FileError(input, hint=e.strerror)

    # ------------------------------------------------------------------ reverse
    try:
        result = reverse_pcm(pcm, fade_samples, lead_in=lead_in)
    except ValueError as e:
        raise click.ClickException(str(e))

    # ------------------------------------------------------------------ output path
    if output is None and input not in (None, '-'):
        p = Path(input)
        output = str(p.with_stem(p.stem + '_rev'))

    # ------------------------------------------------------------------ save
    try:
        save_output(result, output)
    except ValueError as e:
        raise click.ClickException(str(e))
    except OSError as e:
        raise click.FileError(output or '-', hint=e.strerror)

    if pcm.loop_point is None:
        detail = "no loop point, no fade"
    else:
        detail = f"dropped {pcm.loop_point} intro frames, fade-in {fade_samples} frames"
    click.echo(f"Reversed ({result.duration:.3f}s, {detail}) → {output or '-'}", err=True)
