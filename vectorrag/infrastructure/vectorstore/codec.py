"""Binary encoding of embedding vectors for the document store."""
from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ...exceptions import StorageError

# Little-endian 32-bit floats, independent of the host byte order.
VECTOR_DTYPE = np.dtype("<f4")


def encode_vector(vector: Sequence[float]) -> bytes:
    """Serialise a vector to its fixed-width byte representation."""

    return np.asarray(vector, dtype=VECTOR_DTYPE).tobytes()


def decode_vector(blob: bytes) -> list[float]:
    """Deserialise bytes produced by :func:`encode_vector`."""

    if len(blob) % VECTOR_DTYPE.itemsize:
        raise StorageError(
            f"Stored vector has {len(blob)} bytes, not a multiple of {VECTOR_DTYPE.itemsize}"
        )
    return np.frombuffer(blob, dtype=VECTOR_DTYPE).astype(float).tolist()


def quantize_vector(vector: Sequence[float]) -> list[float]:
    """Return the vector exactly as it will read back from storage."""

    return decode_vector(encode_vector(vector))


__all__ = ["VECTOR_DTYPE", "encode_vector", "decode_vector", "quantize_vector"]
