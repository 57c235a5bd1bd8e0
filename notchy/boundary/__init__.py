"""Adapters for external systems (vector index, language models)."""
