import zlib
from base64 import b64encode
from io import BytesIO
from typing import Union

from . import CompressionError


class Compressor:
    """Compresses data into a zlib stream written to a file or stream."""

    def __init__(self, f, *, level: int = zlib.Z_DEFAULT_COMPRESSION):
        """
        Parameters
        ----------
        f: Union[str, Path, FileLike]
            Path/FileHandle/Stream to write compressed data to.
        level: int
            zlib compression level.
            Defaults to :data:`zlib.Z_DEFAULT_COMPRESSION`, which zlib maps to level ``6``.
            The default is fixed so identical input always yields identical output.
            Valid range: ``[-1, 9]``.
        """
        try:
            compressobj = zlib.compressobj(level)
        except (zlib.error, ValueError, MemoryError) as e:
            raise CompressionError(f"could not initialize zlib stream: {e}") from e

        if not hasattr(f, "write"):  # It's probably a path-like object.
            f = open(str(f), "wb")
            self._close_f_on_close = True
        else:
            self._close_f_on_close = False

        self.f = f
        self.level = level
        self._compressobj = compressobj
        self._closed = False

    def _write_compressed(self, data: bytes) -> int:
        if data:
            self.f.write(data)
        return len(data)

    def write(self, data: Union[bytes, bytearray]) -> int:
        """Compress ``data`` to stream.

        Parameters
        ----------
        data: Union[bytes, bytearray]
            Data to be compressed.

        Returns
        -------
        int
            Number of compressed bytes written.
            May be zero when zlib is still buffering input.
        """
        if self._closed:
            raise CompressionError("write to a closed compressor")
        try:
            return self._write_compressed(self._compressobj.compress(data))
        except (zlib.error, MemoryError) as e:
            raise CompressionError(f"could not compress data: {e}") from e

    def flush(self) -> int:
        """Flushes all pending compressed data to the output without ending the zlib stream.

        Returns
        -------
        int
            Number of compressed bytes flushed.
        """
        if self._closed:
            return 0
        try:
            bytes_written = self._write_compressed(self._compressobj.flush(zlib.Z_SYNC_FLUSH))
        except (zlib.error, MemoryError) as e:
            raise CompressionError(f"could not flush zlib stream: {e}") from e
        self.f.flush()
        return bytes_written

    def close(self) -> int:
        """Finishes the zlib stream and closes the output file or stream, if the compressor opened it.

        The stream is only decodable once this has been called.

        Returns
        -------
        int
            Number of compressed bytes written while finishing the stream.
        """
        if self._closed:
            return 0
        try:
            bytes_written = self._write_compressed(self._compressobj.flush(zlib.Z_FINISH))
        except (zlib.error, MemoryError) as e:
            raise CompressionError(f"could not finish zlib stream: {e}") from e
        finally:
            self._closed = True
            if self._close_f_on_close:
                self.f.close()
        return bytes_written

    def __enter__(self) -> "Compressor":
        """Use :class:`Compressor` as a context manager.

        .. code-block:: python

           with rdjson_viewer.Compressor("report.z") as f:
               f.write(b'{"diagnostics": []}')
        """
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        """Calls :meth:`~Compressor.close` on contextmanager exit."""
        self.close()


def deflate(data: Union[bytes, str], *, level: int = zlib.Z_DEFAULT_COMPRESSION) -> bytes:
    """Single-call to compress data into a complete zlib stream.

    Parameters
    ----------
    data: Union[str, bytes]
        Data to compress. ``str`` is encoded as UTF-8.
    level: int
        zlib compression level.

    Returns
    -------
    bytes
        zlib-wrapped DEFLATE stream.
    """
    if isinstance(data, str):
        data = data.encode()
    with BytesIO() as f:
        c = Compressor(f, level=level)
        c.write(data)
        c.close()
        return f.getvalue()


def compress(data: Union[bytes, str], *, level: int = zlib.Z_DEFAULT_COMPRESSION) -> str:
    """Compress data and encode it as a viewer payload.

    Parameters
    ----------
    data: Union[str, bytes]
        Report to compress. May be empty.
    level: int
        zlib compression level.

    Returns
    -------
    str
        Standard, padded base64 encoding of the zlib stream.
    """
    return b64encode(deflate(data, level=level)).decode("ascii")
