# Don't manually change, let poetry-dynamic-versioning-plugin handle it.
__version__ = "0.0.0"


class RdjsonViewerError(Exception):
    """Base class for all errors raised while building or reading viewer links."""


class InvalidFormatError(RdjsonViewerError, ValueError):
    """Report format is neither ``rdjson`` nor ``rdjsonl``."""


class InputError(RdjsonViewerError):
    """Input file or stream could not be read."""


class CompressionError(RdjsonViewerError):
    """zlib stream could not be initialized or written."""


class URLBuildError(RdjsonViewerError):
    """Viewer endpoint is malformed."""


class URLParseError(RdjsonViewerError):
    """URL does not carry a viewer payload."""


class DecodeError(RdjsonViewerError):
    """Payload is not valid base64-encoded zlib data."""


from .compressor import Compressor, compress
from .decompressor import decompress
from .url import VIEWER_BASE_URL, ReportFormat, ViewerLink, build_viewer_url, parse_viewer_url
