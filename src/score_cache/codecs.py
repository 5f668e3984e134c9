"""Value codecs for cached payloads."""

from score_cache.errors import EncodingError


class TextCodec:
    """Text codec: cached values are plain strings.

    Satisfies the ValueCodec[str] protocol. Anything that is not a str
    is rejected, bytes included, so values read back always have the
    type they were written with.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the text codec.

        Args:
            encoding: Character encoding used on the wire.
        """
        self._encoding = encoding

    def encode(self, value: str) -> bytes:
        if not isinstance(value, str):
            raise EncodingError(
                f"Cache values must be str, got {type(value).__name__}"
            )
        try:
            return value.encode(self._encoding)
        except UnicodeEncodeError as e:
            raise EncodingError(f"Failed to encode value: {e}") from e

    def decode(self, data: bytes) -> str:
        try:
            return data.decode(self._encoding)
        except UnicodeDecodeError as e:
            raise EncodingError(f"Failed to decode value: {e}") from e

    @property
    def encoding(self) -> str:
        """Get the character encoding."""
        return self._encoding
