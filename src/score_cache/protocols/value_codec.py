"""Value codec protocol."""

from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class ValueCodec(Protocol[T]):
    """Contract for turning cached values into store bytes and back.

    A codec is the "encodable" capability of a cache: the cache only
    accepts values its codec can encode.
    """

    def encode(self, value: T) -> bytes:
        """Encode a value for the store.

        Raises:
            EncodingError: If the value is not representable.
        """
        ...

    def decode(self, data: bytes) -> T:
        """Decode store bytes back to a value.

        Raises:
            EncodingError: If the data cannot be decoded.
        """
        ...
