"""Vector index exports."""

from .base import SearchHit, VectorIndex
from .codec import decode_vector, encode_vector, quantize_vector
from .memory import InMemoryVectorIndex
from .projection import identity_projection, projection_from_settings, truncate_projection

__all__ = [
    "SearchHit",
    "VectorIndex",
    "InMemoryVectorIndex",
    "encode_vector",
    "decode_vector",
    "quantize_vector",
    "identity_projection",
    "truncate_projection",
    "projection_from_settings",
]
