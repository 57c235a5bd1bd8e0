"""Core pipeline logic: document processing, retrieval and generation."""
