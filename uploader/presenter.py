import html
import logging
import tempfile
import webbrowser
from pathlib import Path
from typing import Sequence

from core.constants import OVERLEAF_URL
from uploader.models import ConversionResult, UploadedFile

logger = logging.getLogger(__name__)

DEFAULT_NAME = "resume"


def artifact_name(files: Sequence[UploadedFile]) -> str:
    """Base name for exports: the first file's name up to its first dot."""
    if not files:
        return DEFAULT_NAME
    return files[0].name.split(".")[0] or DEFAULT_NAME


def _artifact_text(result: ConversionResult) -> str:
    if not result.success or not result.artifact_text:
        raise ValueError("No LaTeX to export")
    return result.artifact_text


def download(result: ConversionResult, files: Sequence[UploadedFile], directory: str | Path = ".") -> Path:
    """Writes the LaTeX unchanged to `<name>.tex` and returns the path."""
    text = _artifact_text(result)
    path = Path(directory) / f"{artifact_name(files)}.tex"
    path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the text byte-for-byte
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    logger.info("Saved LaTeX to %s", path)
    return path


def overleaf_form_fields(result: ConversionResult, files: Sequence[UploadedFile]) -> dict[str, str]:
    return {
        "snip": _artifact_text(result),
        "engine": "pdflatex",
        "name": artifact_name(files),
    }


def overleaf_form_html(fields: dict[str, str], url: str = OVERLEAF_URL) -> str:
    inputs = "\n".join(
        f'    <input type="hidden" name="{html.escape(k)}" value="{html.escape(v)}">'
        for k, v in fields.items()
    )
    return (
        "<!DOCTYPE html>\n<html><body onload=\"document.forms[0].submit()\">\n"
        f'  <form method="post" action="{html.escape(url)}" target="_blank">\n'
        f"{inputs}\n"
        "  </form>\n</body></html>\n"
    )


def open_in_overleaf(result: ConversionResult, files: Sequence[UploadedFile], url: str = OVERLEAF_URL) -> Path:
    """
    Opens the LaTeX in Overleaf in a new browser tab. One-way export.

    The returned HTML file belongs to the caller, who deletes it once the
    browser has loaded it.
    """
    page = overleaf_form_html(overleaf_form_fields(result, files), url)
    with tempfile.NamedTemporaryFile("w", suffix=".html", delete=False, encoding="utf-8") as f:
        f.write(page)
        path = Path(f.name)
    webbrowser.open_new_tab(path.as_uri())
    return path
