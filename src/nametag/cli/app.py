"""CLI application entry point for nametag.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from nametag import __version__
from nametag.cli.output import (
    console,
    print_error,
    print_glyphs,
    print_header,
    print_regions,
    print_step,
    print_success,
    print_tag_info,
)
from nametag.config import (
    GearConfig,
    GeometryConfig,
    LoggingConfig,
    NameTagSettings,
    ProcessingConfig,
    TagConfig,
    UnknownGlyphPolicy,
)
from nametag.core import NameTagBuilder, supported_characters
from nametag.exceptions import AssemblyError, NameTagError
from nametag.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="nametag",
    help="Generate a 3D-printable name tag with raised text and a decorative gear.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Nametag[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def generate(
    text: Annotated[
        str,
        typer.Option(
            "--text",
            "-t",
            help="Name on the front face",
        ),
    ] = "JSCAD",
    text_color: Annotated[
        str,
        typer.Option(
            "--text-color",
            help="Text colour as #rrggbb",
        ),
    ] = "#000000",
    body_color: Annotated[
        str,
        typer.Option(
            "--body-color",
            help="Body colour as #rrggbb",
        ),
    ] = "#e3ff00",
    thickness: Annotated[
        float,
        typer.Option(
            "--thickness",
            help="Body thickness",
        ),
    ] = 2.0,
    width: Annotated[
        float,
        typer.Option(
            "--width",
            help="Half height of the body",
        ),
    ] = 9.0,
    corner_radius: Annotated[
        float,
        typer.Option(
            "--corner-radius",
            help="Radius of the body corners",
        ),
    ] = 4.0,
    resolution: Annotated[
        int,
        typer.Option(
            "--resolution",
            "-r",
            help="Segments per corner circle",
        ),
    ] = 24,
    text_thickness: Annotated[
        float,
        typer.Option(
            "--text-thickness",
            help="Text extrusion height before scaling",
        ),
    ] = 2.0,
    font_weight: Annotated[
        float,
        typer.Option(
            "--font-weight",
            help="Stroke width in font units",
        ),
    ] = 5.0,
    font_width: Annotated[
        float,
        typer.Option(
            "--font-width",
            help="Horizontal text scale in percent (0-200)",
        ),
    ] = 100.0,
    back_text: Annotated[
        str,
        typer.Option(
            "--back-text",
            help="Label engraved into the back face (empty for none)",
        ),
    ] = "hannover.js",
    teeth: Annotated[
        int,
        typer.Option(
            "--teeth",
            help="Number of gear teeth",
        ),
    ] = 10,
    skip_unknown: Annotated[
        bool,
        typer.Option(
            "--skip-unknown",
            help="Drop characters the font has no glyph for instead of failing",
        ),
    ] = False,
    no_validate: Annotated[
        bool,
        typer.Option(
            "--no-validate",
            help="Skip the watertightness check",
        ),
    ] = False,
    workers: Annotated[
        int,
        typer.Option(
            "--workers",
            "-j",
            help="Worker processes for building text and gear",
            min=1,
        ),
    ] = 1,
    list_glyphs: Annotated[
        bool,
        typer.Option(
            "--list-glyphs",
            help="List the characters the font supports and exit",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build a name tag solid and print a summary of it.

    The tag has raised text on the front, a mirrored label engraved into the
    back, a lanyard slot on the left and an involute gear on the right.

    Example:
        nametag --text ADA --teeth 12
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if list_glyphs:
        print_glyphs(supported_characters())
        raise typer.Exit(code=0)

    try:
        settings = NameTagSettings(
            tag=TagConfig(
                name_text=text,
                text_color=text_color,
                body_color=body_color,
                thickness=thickness,
                width=width,
                corner_radius=corner_radius,
                resolution=resolution,
                text_thickness=text_thickness,
                font_weight=font_weight,
                font_width=font_width,
                back_text=back_text,
                unknown_glyphs=UnknownGlyphPolicy.SKIP if skip_unknown else UnknownGlyphPolicy.FAIL,
            ),
            gear=GearConfig(num_teeth=teeth),
            geometry=GeometryConfig(validate_manifold=not no_validate),
            processing=ProcessingConfig(max_workers=workers),
            logging=LoggingConfig(log_file=log_file, log_level=log_level),
        )
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        print_error("Invalid parameters", details=f"{field}: {first['msg']}")
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    try:
        if not quiet:
            print_step("Building")
            print_tag_info(text, back_text, workers)

        tag = NameTagBuilder(settings, logger=logger).build()

        if not quiet:
            print_regions(tag)
            print_success(tag, validated=not no_validate, verbose=verbose)

    except AssemblyError as e:
        print_error(f"Could not build '{e.step}'", details=e.reason)
        raise typer.Exit(code=1)
    except NameTagError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
