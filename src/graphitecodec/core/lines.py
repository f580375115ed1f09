"""Line splitting for inbound byte and text streams."""

import codecs


class LineSplitter:
    """Buffer a stream and hand out complete, delimiter-free lines.

    Bytes are decoded incrementally, so a multi-byte character split across
    two feeds is reassembled. Invalid sequences are replaced.

    Args:
        delimiter: Line terminator to split on.
        encoding: Encoding used to decode bytes input.
    """

    def __init__(self, delimiter: str = "\n", encoding: str = "utf-8") -> None:
        if not delimiter:
            raise ValueError("delimiter must not be empty")
        self._delimiter = delimiter
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""

    def feed(self, data: bytes | str) -> list[str]:
        """Append data and return all lines completed by it."""
        if isinstance(data, bytes):
            data = self._decoder.decode(data)
        self._buffer += data
        *lines, self._buffer = self._buffer.split(self._delimiter)
        return lines

    def flush(self) -> list[str]:
        """Return the buffered partial line, if any, and reset."""
        remainder = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        return [remainder] if remainder else []
