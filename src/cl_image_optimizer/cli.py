"""Command line entry point: ``cl-image-optimizer [INPUT] [OUTPUT]``."""

import sys
from io import BytesIO
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from pydantic import ValidationError

from .common.errors import InvalidInputError, OptimizerError, WriteError
from .common.schemas import ParameterBundle
from .optimizer import optimize

app = typer.Typer(add_completion=False)


def configure_logging(verbose: bool) -> None:
    """Send logs to stderr; stdout may carry image bytes."""
    logger.remove()
    _ = logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def stdin_is_piped() -> bool:
    return not sys.stdin.isatty()


def read_input(input_file: Optional[Path]) -> bytes:
    """Read the source image from ``input_file`` or piped stdin."""
    if input_file is None:
        if not stdin_is_piped():
            raise InvalidInputError("You must supply a file via stdin or the first argument")
        return sys.stdin.buffer.read()

    try:
        return input_file.read_bytes()
    except OSError as exc:
        raise InvalidInputError(f"Error reading file: {exc}") from exc


def write_output(output_file: Optional[Path], data: bytes) -> None:
    """Write the encoded image to ``output_file`` or stdout."""
    try:
        if output_file is None:
            _ = sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
        else:
            _ = output_file.write_bytes(data)
    except OSError as exc:
        raise WriteError(f"Could not write to {output_file or 'stdout'}: {exc}") from exc


@app.command()
def main(
    input_file: Optional[Path] = typer.Argument(None, help="Input image (omit to read from stdin)"),
    output_file: Optional[Path] = typer.Argument(None, help="Output image (omit to write to stdout)"),
    mime_type: str = typer.Option(
        "",
        "--format",
        help="The mime type to output. Defaults to the output file format or original format.",
    ),
    quality: int = typer.Option(0, "--quality", help="The quality level for the final image"),
    width: int = typer.Option(0, "--width", min=0, help="The width of the final image"),
    height: int = typer.Option(0, "--height", min=0, help="The height of the final image"),
    dpr: float = typer.Option(1.0, "--dpr", help="The viewport DPR to optimize for"),
    downlink: float = typer.Option(0.384, "--downlink", help="The downlink speed (Mbps) to optimize for"),
    save_data: bool = typer.Option(False, "--savedata", help="Optimize to save data"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    Resize and re-encode an image for a client's viewport, DPR and network.
    """
    configure_logging(verbose)

    try:
        bundle = ParameterBundle(
            mime_type=mime_type,
            quality=quality,
            width=width,
            height=height,
            dpr=dpr,
            downlink=downlink,
            save_data=save_data,
        )
    except ValidationError as exc:
        typer.echo(f"Error: invalid parameters: {exc}", err=True)
        raise typer.Exit(code=1)

    # The output is only touched once the whole image has been encoded
    buffer = BytesIO()
    try:
        data = read_input(input_file)
        _ = optimize(data, buffer, bundle, output_file)
        write_output(output_file, buffer.getvalue())

    except OptimizerError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
