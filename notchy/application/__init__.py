"""Application layer: services and persistence adapters."""
