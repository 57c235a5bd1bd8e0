"""Notchy: retrieval-augmented chat and study-aid generation over uploaded PDFs."""

__version__ = "0.1.0"
