"""CLI interface for voiceprep."""

from pathlib import Path
import json

import typer

from .errors import VoicePrepError
from .interfaces.cli_handlers import inspect_path, prepare_from_path, validate_from_path
from .options import DecoderBackend

app = typer.Typer(help="Prepare recorded voice samples for voice cloning")

# Exit code for samples rejected by the validation policy.
VALIDATION_FAILED_EXIT_CODE = 2


@app.command("prepare")
def prepare_command(
    input_path: Path = typer.Option(..., "--input", "-i", help="Path to the recorded sample"),
    output: Path = typer.Option(..., "--output", "-o", help="Path to write the prepared WAV"),
    profile: str = typer.Option(
        "zero-shot",
        "--profile",
        "-p",
        help="Voice profile: elevenlabs, zero-shot, or an id from --profile-config.",
    ),
    profile_config: Path | None = typer.Option(
        None,
        "--profile-config",
        help="Optional YAML/JSON file with additional voice profiles.",
    ),
    decoder: DecoderBackend = typer.Option(
        DecoderBackend.AUTO,
        "--decoder",
        case_sensitive=False,
        help="Decoding backend: auto, pedalboard, soundfile or ffmpeg.",
    ),
    report_json: Path | None = typer.Option(
        None,
        "--report-json",
        help="Optional path to write validation and level diagnostics JSON.",
    ),
) -> None:
    """Validate, downmix, normalize and encode a sample to 16-bit mono WAV."""

    try:
        result = prepare_from_path(
            input_path,
            output,
            profile_id=profile,
            profile_config=profile_config,
            decoder_backend=decoder,
            report_json=report_json,
        )
    except (VoicePrepError, ValueError) as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    if not result.valid:
        typer.echo(result.validation.message or "Sample failed validation.", err=True)
        raise typer.Exit(code=VALIDATION_FAILED_EXIT_CODE)

    typer.echo(f"Prepared sample written to: {output}")
    typer.echo(f"Duration: {result.validation.duration_seconds:.1f}s")
    if result.output_levels is not None:
        typer.echo(
            f"Output levels: rms={result.output_levels.rms_db:.1f} dBFS "
            f"peak={result.output_levels.peak_db:.1f} dBFS"
        )


@app.command("validate")
def validate_command(
    input_path: Path = typer.Option(..., "--input", "-i", help="Path to the recorded sample"),
    profile: str = typer.Option("zero-shot", "--profile", "-p", help="Voice profile id."),
    profile_config: Path | None = typer.Option(
        None,
        "--profile-config",
        help="Optional YAML/JSON file with additional voice profiles.",
    ),
    decoder: DecoderBackend = typer.Option(
        DecoderBackend.AUTO,
        "--decoder",
        case_sensitive=False,
        help="Decoding backend: auto, pedalboard, soundfile or ffmpeg.",
    ),
) -> None:
    """Check a sample against a profile's size and duration policy."""

    try:
        validation = validate_from_path(
            input_path,
            profile_id=profile,
            profile_config=profile_config,
            decoder_backend=decoder,
        )
    except (VoicePrepError, ValueError) as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    if not validation.valid:
        typer.echo(validation.message or "Sample failed validation.", err=True)
        raise typer.Exit(code=VALIDATION_FAILED_EXIT_CODE)

    typer.echo(f"Valid sample ({validation.duration_seconds:.1f}s)")


@app.command("inspect")
def inspect_command(
    input_path: Path = typer.Option(..., "--input", "-i", help="Path to the recorded sample"),
    decoder: DecoderBackend = typer.Option(
        DecoderBackend.AUTO,
        "--decoder",
        case_sensitive=False,
        help="Decoding backend: auto, pedalboard, soundfile or ffmpeg.",
    ),
) -> None:
    """Print format and recording-level diagnostics as JSON."""

    try:
        report = inspect_path(input_path, decoder_backend=decoder)
    except VoicePrepError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    typer.echo(json.dumps(report, indent=2))


def main(prog_name: str | None = None) -> None:
    app(prog_name=prog_name)


if __name__ == "__main__":
    main()
