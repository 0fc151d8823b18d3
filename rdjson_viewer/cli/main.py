import sys
from pathlib import Path
from typing import Annotated, Iterable, List, Optional

from cyclopts import App, Parameter

import rdjson_viewer
from rdjson_viewer import InputError, RdjsonViewerError
from rdjson_viewer.compressor import compress
from rdjson_viewer.decompressor import decompress
from rdjson_viewer.url import ReportFormat, build_viewer_url, parse_viewer_url

app = App(
    help="Build a shareable rdjson-viewer link for a reviewdog diagnostic report.",
    version=rdjson_viewer.__version__,
)

# Long flags that may also be spelled with a single dash, e.g. ``-file report.json``.
_SINGLE_DASH_FLAGS = ("file", "format", "base-url")


def normalize_flags(tokens: Iterable[str]) -> List[str]:
    """Rewrite single-dash long flags (``-format=rdjsonl``) to their double-dash form."""
    out = []
    for token in tokens:
        if token.startswith("-") and not token.startswith("--"):
            name = token[1:].split("=", 1)[0]
            if name in _SINGLE_DASH_FLAGS:
                token = "-" + token
        out.append(token)
    return out


def read(input_: Optional[Path]) -> bytes:
    try:
        return sys.stdin.buffer.read() if input_ is None else input_.read_bytes()
    except OSError as e:
        raise InputError(f"could not read input: {e}") from e


def write(output: Optional[Path], data: bytes):
    try:
        if output is None:
            sys.stdout.buffer.write(data)
            sys.stdout.flush()
        else:
            output.write_bytes(data)
    except OSError as e:
        raise RdjsonViewerError(f"could not write output: {e}") from e


@app.default
def link(
    *,
    file: Annotated[str, Parameter(name=["--file", "-f"])] = "",
    format_: Annotated[str, Parameter(name="--format")] = ReportFormat.RDJSON.value,
    base_url: Annotated[str, Parameter(name="--base-url")] = "",
):
    """Print a viewer URL embedding a compressed report.

    Parameters
    ----------
    file: str
        Path to the input file. Defaults to stdin.
    format_: str
        Format of the input, either ``rdjson`` or ``rdjsonl``.
    base_url: str
        Base HTML URL the viewer uses to link file paths.
    """
    report_format = ReportFormat.parse(format_)
    input_bytes = read(Path(file) if file else None)
    payload = compress(input_bytes)
    print(build_viewer_url(payload, report_format, base_url))


@app.command
def decode(
    url: str,
    output: Annotated[Optional[Path], Parameter(name=["--output", "-o"])] = None,
):
    """Decode the report embedded in a viewer URL.

    Parameters
    ----------
    url: str
        Viewer URL, as printed by this tool.
    output: Optional[Path]
        Output report file. Defaults to stdout.
    """
    viewer_link = parse_viewer_url(url)
    write(output, decompress(viewer_link.payload))


def run_app(tokens: Optional[Iterable[str]] = None):
    if tokens is None:
        tokens = sys.argv[1:]
    try:
        app(normalize_flags(tokens))
    except RdjsonViewerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
