from enum import Enum
from typing import NamedTuple, Union
from urllib.parse import parse_qs, parse_qsl, urlencode, urlsplit, urlunsplit

from . import InvalidFormatError, URLBuildError, URLParseError

VIEWER_BASE_URL = "https://reviewdog.github.io/rdjson-viewer"
BASE_PATH_PARAM = "base_path_url"


class ReportFormat(str, Enum):
    """Diagnostic report format; doubles as the query parameter carrying the payload."""

    RDJSON = "rdjson"
    RDJSONL = "rdjsonl"

    @classmethod
    def parse(cls, value: Union[str, "ReportFormat"]) -> "ReportFormat":
        try:
            return cls(value)
        except ValueError:
            raise InvalidFormatError(f"format must be either 'rdjson' or 'rdjsonl', got {value!r}") from None


class ViewerLink(NamedTuple):
    format: ReportFormat
    payload: str
    base_path_url: str = ""


def build_viewer_url(
    payload: str,
    report_format: Union[str, ReportFormat] = ReportFormat.RDJSON,
    base_path_url: str = "",
    *,
    endpoint: str = VIEWER_BASE_URL,
) -> str:
    """Build a viewer link carrying ``payload``.

    Parameters
    ----------
    payload: str
        Encoded report, as produced by :func:`~rdjson_viewer.compress`.
    report_format: Union[str, ReportFormat]
        Selects the query parameter name holding ``payload``.
    base_path_url: str
        If non-empty, set as the ``base_path_url`` parameter the viewer uses to link file paths.
    endpoint: str
        Viewer address. Only overridden by tests.

    Returns
    -------
    str
        Viewer URL. Query keys are sorted, and every ``+`` in the final string is written as ``%20``.
    """
    report_format = ReportFormat.parse(report_format)

    parts = urlsplit(endpoint)
    if not parts.scheme or not parts.netloc:
        raise URLBuildError(f"malformed viewer endpoint {endpoint!r}")

    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    query[report_format.value] = payload
    if base_path_url:
        query[BASE_PATH_PARAM] = base_path_url

    url = urlunsplit(parts._replace(query=urlencode(sorted(query.items()))))

    # Spaces are form-encoded as "+"; the viewer expects "%20".
    return url.replace("+", "%20")


def parse_viewer_url(url: str) -> ViewerLink:
    """Extract the format, payload and base path from a viewer link.

    ``rdjson`` takes precedence when a link carries both payload parameters.
    """
    query = parse_qs(urlsplit(url).query)
    for report_format in ReportFormat:
        values = query.get(report_format.value)
        if values and values[0]:
            base_path_url = query.get(BASE_PATH_PARAM, [""])[0]
            return ViewerLink(report_format, values[0], base_path_url)
    raise URLParseError(f"no 'rdjson' or 'rdjsonl' parameter in {url!r}")
