# smart_tremolo/cli/process_cmd.py

"""
CLI command applying the tremolo to an audio file.
"""

import logging
import math
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from smart_tremolo.config import TremoloConfig
from smart_tremolo.core.audio.io import AudioIOError, load_audio, make_test_pad, save_audio
from smart_tremolo.core.controller import LoudnessFollower, NoOpController
from smart_tremolo.core.driver import DepthRamp, ProcessingReport, run_tremolo
from smart_tremolo.core.lfo import parse_shape
from smart_tremolo.core.tempo import RateSyncError, rate_from_sync
from smart_tremolo.core.tremolo import ModulationEngine

logger = logging.getLogger(__name__)


def _print_analysis(report: ProcessingReport) -> None:
    """Prints per-second average RMS/ZCR as a Rich table."""
    table = Table(title="Per-second analysis")
    table.add_column("Interval", justify="right")
    table.add_column("Avg RMS", justify="right")
    table.add_column("Avg ZCR", justify="right")
    table.add_column("Frames", justify="right")
    for second, rms, zcr, count in report.per_second():
        table.add_row(f"{second}s..{second + 1}s", f"{rms:.5f}", f"{zcr:.5f}", str(count))
    Console().print(table)


def _require_finite(ctx, param, value: Optional[float]) -> Optional[float]:
    """Click callback rejecting inf and nan for float options."""
    if value is not None and not math.isfinite(value):
        raise click.BadParameter(f"{value} is not a finite number.", ctx=ctx, param=param)
    return value


def _resolve_input(input_file: Optional[str], config: TremoloConfig) -> Path:
    """
    Returns the input path. When no input was given and the configured default
    does not exist, a test pad is generated and written there.
    """
    if input_file is not None:
        return Path(input_file)
    input_path = config.processing.default_input
    if not input_path.exists():
        logger.warning(f"Input file not found: {input_path} -> generating a test pad.")
        pad = make_test_pad(config.processing.test_pad_seconds, config.processing.test_pad_sample_rate)
        save_audio(pad, input_path, subtype=config.processing.output_subtype)
    return input_path


@click.command("process")
@click.option("-i", "--in", "input_file", type=click.Path(exists=True, dir_okay=False),
              default=None, help="Input audio file (mono or stereo). Defaults to the configured input.")
@click.option("-o", "--out", "output_file", type=click.Path(dir_okay=False),
              default=None, help="Output WAV file. Defaults to the configured output.")
@click.option("--rate", type=click.FloatRange(min=0.0, min_open=True), default=None, callback=_require_finite,
              help="LFO rate in Hz.")
@click.option("--depth", type=click.FloatRange(0.0, 1.0), default=None, callback=_require_finite,
              help="Modulation depth (0..1).")
@click.option("--wet", type=click.FloatRange(0.0, 1.0), default=None, callback=_require_finite,
              help="Wet/dry mix (0..1).")
@click.option("--stereophase", type=click.FloatRange(0.0, 180.0), default=None, callback=_require_finite,
              help="Right-channel LFO phase offset in degrees (0..180).")
@click.option("--shape", type=str, default=None,
              help="LFO shape: sine, triangle, square, square-soft. Unknown names use sine.")
@click.option("--rate-sync", type=str, default=None,
              help="Tempo-synced rate, e.g. 'bpm:120,div:1/8'. Overrides --rate.")
@click.option("--block-size", type=click.IntRange(min=1), default=None,
              help="Frames per processing block.")
@click.option("--analyze", is_flag=True, default=False,
              help="Print per-second RMS/ZCR averages.")
@click.option("--demo", is_flag=True, default=False,
              help="Ramp depth from 20% to 100% between 5 s and 8 s.")
@click.option("--follow-loudness", is_flag=True, default=False,
              help="Let the frame loudness drive the depth.")
@click.pass_context
def process_cmd(
    ctx,
    input_file: Optional[str],
    output_file: Optional[str],
    rate: Optional[float],
    depth: Optional[float],
    wet: Optional[float],
    stereophase: Optional[float],
    shape: Optional[str],
    rate_sync: Optional[str],
    block_size: Optional[int],
    analyze: bool,
    demo: bool,
    follow_loudness: bool
):
    """Apply the tremolo effect to an audio file."""
    config: TremoloConfig = ctx.obj['config']
    params = config.tremolo
    rate = params.rate_hz if rate is None else rate
    depth = params.depth if depth is None else depth
    wet = params.wet if wet is None else wet
    stereophase = params.stereo_phase_deg if stereophase is None else stereophase
    lfo_shape = parse_shape(params.shape if shape is None else shape)
    block_size = config.processing.block_size if block_size is None else block_size
    output_path = Path(output_file) if output_file else config.processing.default_output

    try:
        input_path = _resolve_input(input_file, config)
        audio = load_audio(input_path)
    except FileNotFoundError as e:
        raise click.UsageError(str(e))
    except AudioIOError as e:
        raise click.ClickException(str(e))

    engine = ModulationEngine.configured(
        audio.sample_rate,
        rate_hz=rate,
        depth=depth,
        wet=wet,
        stereo_phase_deg=stereophase,
        shape=lfo_shape,
    )
    if rate_sync:
        try:
            engine.set_rate_hz(rate_from_sync(rate_sync))
        except RateSyncError as e:
            logger.warning(f"{e} Keeping rate {engine.rate_hz} Hz.")

    logger.info(f"Input: {input_path} | Output: {output_path}")
    logger.info(f"SR={audio.sample_rate} ch={audio.channels} duration={audio.duration:.2f}s")
    logger.info(f"Params: rate={engine.rate_hz} depth={engine.depth} shape={lfo_shape.value} "
                f"stereophase={engine.stereo_phase_deg} wet={engine.wet}")

    controller = LoudnessFollower() if follow_loudness else NoOpController()
    automation = DepthRamp(engine.depth) if demo else None
    report = run_tremolo(
        audio.samples,
        audio.sample_rate,
        audio.channels,
        engine,
        controller=controller,
        block_size=block_size,
        automation=automation,
    )

    try:
        save_audio(audio, output_path, subtype=config.processing.output_subtype)
    except AudioIOError as e:
        raise click.ClickException(str(e))

    if analyze:
        _print_analysis(report)
    click.echo(f"Processed '{input_path.name}' ({report.duration:.2f}s, {audio.channels} ch) -> '{output_path}'.")
