#!/usr/bin/env python3
"""
Resume LaTeX Converter CLI

Sends resume files to a running converter API and saves the LaTeX it returns.

Commands:
    convert - Validate, upload and convert one or more resume files
    serve   - Run the API server

Examples:\n

    cli.py convert resume.pdf                         # Writes resume.tex

    cli.py convert page1.png page2.png -o out/        # Several pages, one document

    cli.py convert resume.docx --overleaf             # Also open the result in Overleaf
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from core.config import settings
from uploader import presenter
from uploader.intake import IntakeSurface
from uploader.models import UploadConfig
from uploader.state import UploadStateStore
from uploader.submitter import BatchSubmitter

app = typer.Typer(
    help="Convert resume files to LaTeX through the converter API",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


async def _run(paths: List[Path], api_url: str, output_dir: Path, overleaf: bool) -> int:
    store = UploadStateStore(UploadConfig.from_settings(settings))
    intake = IntakeSurface(store)

    if not await intake.browse(paths):
        typer.secho(f"Error: {store.error}", fg=typer.colors.RED, err=True)
        return 1

    for index, file in enumerate(store.files, start=1):
        typer.echo(f"  {index}. {file.name} ({file.mime_type}, {file.size_bytes / 1024:.1f} KB)")

    typer.echo("Converting to LaTeX...")
    result = await BatchSubmitter(api_url).process(store)
    if not result.success:
        typer.secho(f"Error: {result.error}", fg=typer.colors.RED, err=True)
        return 1

    path = presenter.download(result, store.files, output_dir)
    typer.secho(f"Resume successfully converted to LaTeX: {path}", fg=typer.colors.GREEN)

    if overleaf:
        page = presenter.open_in_overleaf(result, store.files, settings.OVERLEAF_URL)
        typer.echo(f"Opened in Overleaf (handoff page: {page})")
    return 0


@app.command("convert")
def convert_command(
    paths: Annotated[
        List[Path],
        typer.Argument(help="Resume files (images, PDF, text, HTML or Word)"),
    ],
    api_url: Annotated[
        Optional[str],
        typer.Option("--api-url", help="Base URL of the converter API"),
    ] = None,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for the .tex file"),
    ] = Path("."),
    overleaf: Annotated[
        bool,
        typer.Option("--overleaf", help="Open the result in Overleaf"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
):
    """Validate, upload and convert resume files to a single LaTeX document."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    code = asyncio.run(_run(paths, api_url or settings.API_BASE_URL, output_dir, overleaf))
    raise typer.Exit(code=code)


@app.command("serve")
def serve_command(
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = "0.0.0.0",
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on")] = 8000,
):
    """Run the converter API."""
    import uvicorn

    uvicorn.run("main:app", host=host, port=port)


if __name__ == "__main__":
    app()
