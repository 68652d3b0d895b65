"""Computes SHA-1 content fingerprints and validates their text form."""

import hashlib
import re
from typing import Union

from objstore.composer import compose
from objstore.constants import HASH_ALGORITHM, UID_LENGTH
from objstore.exceptions import ObjectStoreError

_FINGERPRINT_RE = re.compile(r'[0-9a-f]{%d}' % UID_LENGTH)


def _new_hasher():
    try:
        return hashlib.new(HASH_ALGORITHM)
    except ValueError as e:
        raise RuntimeError(f"System does not support {HASH_ALGORITHM}") from e


def _as_bytes(data: Union[bytes, str]) -> bytes:
    if isinstance(data, str):
        return data.encode('utf-8')
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    raise ObjectStoreError(
        f"Cannot digest a value of type {type(data).__name__}; pass bytes or str"
    )


def digest(data: Union[bytes, str]) -> str:
    """
    Compute the fingerprint of data.

    Args:
        data: Bytes to fingerprint, or text which is encoded as UTF-8 first

    Returns:
        40-character lowercase hexadecimal SHA-1 digest
    """
    hasher = _new_hasher()
    hasher.update(_as_bytes(data))
    return hasher.hexdigest()


def digest_parts(*parts: Union[bytes, str]) -> str:
    """
    Fingerprint several bytes/str parts as one buffer.

    Args:
        *parts: Inputs accepted by compose()

    Returns:
        Fingerprint of the concatenated parts
    """
    return digest(compose(parts))


def is_fingerprint(text) -> bool:
    """
    Check that text is a well-formed fingerprint (exactly 40 lowercase hex characters).
    """
    return isinstance(text, str) and _FINGERPRINT_RE.fullmatch(text) is not None


class IncrementalDigest:
    """
    Fingerprint of an object whose bytes arrive in pieces, for example a
    working-tree file read block by block. The result equals digest() of
    all pieces joined in order.

        fingerprint = IncrementalDigest()
        for block in blocks:
            fingerprint.update(block)
        oid = fingerprint.finalize()
    """

    def __init__(self):
        self._hasher = _new_hasher()
        self._done = False

    def update(self, data: Union[bytes, str]) -> None:
        """
        Append a piece of the object's content; text is taken as UTF-8.

        Raises:
            ObjectStoreError: If the fingerprint was already finalized
        """
        if self._done:
            raise ObjectStoreError("Cannot update a digest after finalization")
        self._hasher.update(_as_bytes(data))

    def finalize(self) -> str:
        """Return the object id of everything passed to update() so far."""
        self._done = True
        return self._hasher.hexdigest()

    def reset(self) -> None:
        """Discard all pieces so another object can be fingerprinted."""
        self._hasher = _new_hasher()
        self._done = False
