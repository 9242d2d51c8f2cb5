"""Document store with exact in-memory vector search and retrieval augmented answers."""

__version__ = "0.1.0"
