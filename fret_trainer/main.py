#!/usr/bin/env python3
"""Command-line entry point for fret_trainer."""

import sys
import time
from typing import FrozenSet, Optional

import click

from .audio.wav_source import WavFileFrameSource
from .core.config import AudioConfig, ConfigManager, GameConfig
from .core.errors import ConfigurationError
from .fretboard import STANDARD_TUNING, enumerate_candidates
from .logger import get_logger
from .logging_config import setup_logging
from .note_game_core import NoteGame
from .note_types import AudioFrame, FretRange
from .note_utils import note_from_frequency
from .pitch_detector import detect_pitch, rms
from .ui import ConsoleUI

logger = get_logger(__name__)

COMMAND_HELP = """Commands while playing:
  strings 1,2,3     practise only these strings ('all' for every string)
  frets 0-5         practise this fret range
  incidentals on    include sharps (on/off)
  threshold 0.02    silence threshold (RMS, 0-1)
  skip              pick a different note
  q                 quit"""


def parse_strings(text: str) -> FrozenSet[int]:
    """Parse '1,2,6' (or 'all') into a set of string ids."""
    text = text.strip().lower()
    if text == "all":
        return frozenset(STANDARD_TUNING)
    try:
        return frozenset(int(s) for s in text.split(",") if s.strip())
    except ValueError:
        raise ConfigurationError(f"Invalid string list: {text!r}")


def parse_frets(text: str) -> FretRange:
    """Parse '0-12' (or a single fret like '5') into a FretRange."""
    start, sep, end = text.strip().partition("-")
    try:
        first = int(start)
        last = int(end) if sep else first
    except ValueError:
        raise ConfigurationError(f"Invalid fret range: {text!r}")
    return FretRange(first, last)


def parse_switch(text: str) -> bool:
    value = text.strip().lower()
    if value in ("on", "yes", "true", "1"):
        return True
    if value in ("off", "no", "false", "0"):
        return False
    raise ConfigurationError(f"Expected on/off, got {text!r}")


def apply_command(game: NoteGame, line: str) -> bool:
    """Apply one interactive settings command to a running game.

    Returns:
        False when the player asked to quit, True otherwise

    Raises:
        ConfigurationError: For an unknown command or invalid setting
    """
    name, _, arg = line.strip().partition(" ")
    name = name.lower()
    if not name:
        return True
    if name in ("q", "quit", "exit"):
        return False
    if name == "skip":
        game.skip()
    elif name == "strings":
        game.update_config(selected_strings=parse_strings(arg))
    elif name == "frets":
        game.update_config(fret_range=parse_frets(arg))
    elif name == "incidentals":
        game.update_config(include_incidentals=parse_switch(arg))
    elif name == "threshold":
        try:
            threshold = float(arg)
        except ValueError:
            raise ConfigurationError(f"Invalid threshold: {arg!r}")
        game.update_config(silence_threshold=threshold)
    else:
        raise ConfigurationError(f"Unknown command: {name!r}")
    return True


def _parse_option(parser):
    def callback(ctx, param, value):
        if value is None:
            return None
        try:
            return parser(value)
        except ConfigurationError as e:
            raise click.BadParameter(str(e))

    return callback


def _build_game_config(
    base: GameConfig,
    threshold: Optional[float],
    strings: Optional[FrozenSet[int]],
    frets: Optional[FretRange],
    incidentals: Optional[bool],
    show_detected: Optional[bool],
) -> GameConfig:
    changes = {
        "silence_threshold": threshold,
        "selected_strings": strings,
        "fret_range": frets,
        "include_incidentals": incidentals,
        "show_detected_pitch": show_detected,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    try:
        return base.replace(**changes)
    except ConfigurationError as e:
        raise click.UsageError(str(e))


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Settings directory (default: ~/.config/fret_trainer).",
)
@click.pass_context
def cli(ctx, debug, config_dir):
    """Fretboard ear trainer: play the note you are asked for."""
    setup_logging(level="DEBUG" if debug else "WARNING")
    ctx.obj = ConfigManager(config_dir)


game_options = [
    click.option(
        "--threshold",
        type=click.FloatRange(0.0, 1.0),
        default=None,
        help="Silence threshold as RMS amplitude (0-1).",
    ),
    click.option(
        "--strings",
        callback=_parse_option(parse_strings),
        default=None,
        help="Strings to practise, e.g. '1,2,3' or 'all'.",
    ),
    click.option(
        "--frets",
        callback=_parse_option(parse_frets),
        default=None,
        help="Fret range, e.g. '0-12'.",
    ),
    click.option(
        "--incidentals/--no-incidentals",
        default=None,
        help="Include sharps in the prompts.",
    ),
]


def with_game_options(func):
    for option in reversed(game_options):
        func = option(func)
    return func


@cli.command()
@with_game_options
@click.option(
    "--show-detected/--hide-detected",
    default=None,
    help="Show notes that were heard but did not match.",
)
@click.option("--device", type=int, default=None, help="Audio input device ID.")
@click.option("--sample-rate", type=int, default=None, help="Audio sample rate in Hz.")
@click.option("--wav", type=click.Path(exists=True, dir_okay=False), default=None,
              help="Play against a WAV file instead of the microphone.")
@click.option("--duration", "-t", type=float, default=None,
              help="Stop after this many seconds.")
@click.option("--plain", is_flag=True, help="No large banner text.")
@click.option("--save", is_flag=True, help="Remember these settings.")
@click.pass_obj
def play(config_manager, threshold, strings, frets, incidentals, show_detected,
         device, sample_rate, wav, duration, plain, save):
    """Start a practice session."""
    game_config = _build_game_config(
        config_manager.load_game_config(),
        threshold, strings, frets, incidentals, show_detected,
    )
    audio_config = config_manager.load_audio_config()
    if device is not None or sample_rate is not None:
        audio_config = AudioConfig(
            device_id=device if device is not None else audio_config.device_id,
            sample_rate=sample_rate or audio_config.sample_rate,
            frames_per_buffer=audio_config.frames_per_buffer,
        )

    game = NoteGame(game_config)
    ui = ConsoleUI(show_detected_pitch=game_config.show_detected_pitch, big_text=not plain)
    ui.attach(game)

    try:
        game.start()
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    if save:
        config_manager.save_game_config(game_config)
        config_manager.save_audio_config(audio_config)

    if wav:
        source = WavFileFrameSource(wav, frames_per_buffer=audio_config.frames_per_buffer)
    else:
        from .audio.microphone import SoundDeviceFrameSource

        source = SoundDeviceFrameSource(
            device_id=audio_config.device_id,
            sample_rate=audio_config.sample_rate,
            frames_per_buffer=audio_config.frames_per_buffer,
        )

    logger.info("Starting session with %s", game_config)
    if not source.start(game.on_frame):
        raise click.ClickException("Could not start audio input")

    try:
        if wav:
            source.wait(duration)
        elif duration:
            time.sleep(duration)
        else:
            _command_loop(game)
    except KeyboardInterrupt:
        pass
    finally:
        source.stop()
        ui.show_stats(game)


def _command_loop(game: NoteGame) -> None:
    click.echo(COMMAND_HELP)
    for line in click.get_text_stream("stdin"):
        try:
            if not apply_command(game, line):
                break
        except ConfigurationError as e:
            # Bad settings keep the current round going
            click.echo(f"Error: {e}", err=True)


@cli.command()
@with_game_options
@click.pass_obj
def candidates(config_manager, threshold, strings, frets, incidentals):
    """List the notes a session with these settings can ask for."""
    game_config = _build_game_config(
        config_manager.load_game_config(), threshold, strings, frets, incidentals, None
    )
    try:
        found = enumerate_candidates(
            STANDARD_TUNING,
            game_config.selected_strings,
            game_config.fret_range,
            game_config.include_incidentals,
        )
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    for candidate in found:
        click.echo(f"string {candidate.string}  fret {candidate.fret:>2}  {candidate.note}")


@cli.command()
def devices():
    """List audio input devices."""
    from .audio.microphone import list_input_devices

    for device in list_input_devices():
        click.echo(
            f"{device['id']:>3}: {device['name']} "
            f"({device['channels']} ch, {device['default_samplerate']:.0f} Hz)"
        )


@cli.command()
@click.argument("wav", type=click.Path(exists=True, dir_okay=False))
@click.option("--threshold", type=click.FloatRange(0.0, 1.0), default=0.01,
              help="Silence threshold as RMS amplitude (0-1).")
@click.option("--frames", type=int, default=2048, help="Samples per frame.")
def detect(wav, threshold, frames):
    """Print the pitch detected in each frame of a WAV file."""
    source = WavFileFrameSource(wav, frames_per_buffer=frames)
    for index, samples in enumerate(source.frames()):
        freq = detect_pitch(AudioFrame(samples, source.sample_rate), threshold)
        seconds = index * frames / source.sample_rate
        if freq is None:
            click.echo(f"{seconds:7.2f}s  no pitch (rms {rms(samples):.4f})")
        else:
            click.echo(f"{seconds:7.2f}s  {note_from_frequency(freq)}  {freq:.1f}Hz")


def main():
    """Main entry point for fret_trainer."""
    return cli()


if __name__ == "__main__":
    sys.exit(main())
