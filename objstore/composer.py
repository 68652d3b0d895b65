"""Concatenates bytes and text parts into one buffer for hashing or writing."""

from typing import Iterable, Union

from objstore.exceptions import ObjectStoreError

BytesOrText = Union[bytes, str]


def compose(inputs: Iterable[BytesOrText]) -> bytes:
    """
    Concatenate an ordered sequence of parts into a single buffer.

    Text parts are encoded as UTF-8. Example usage:
        digest(compose([content, "blob"]))
        write_bytes(path, compose(["header\\n", payload]))

    Args:
        inputs: Ordered sequence of bytes or str parts

    Returns:
        Buffer whose length is the sum of the encoded part lengths

    Raises:
        ObjectStoreError: If a part is None or neither bytes nor str
    """
    if isinstance(inputs, (bytes, bytearray, str)):
        raise ObjectStoreError(
            "compose() takes a sequence of parts, not a single bytes or str value"
        )

    parts = []
    for position, value in enumerate(inputs):
        if value is None:
            raise ObjectStoreError(
                f"Cannot concatenate an absent value (part {position} is None)"
            )
        if isinstance(value, str):
            parts.append(value.encode('utf-8'))
        elif isinstance(value, (bytes, bytearray)):
            parts.append(bytes(value))
        else:
            raise ObjectStoreError(
                f"compose() can only be used on bytes or str, but part {position} "
                f"is {type(value).__name__}. For other values, encode them as a Record first."
            )
    return b''.join(parts)
