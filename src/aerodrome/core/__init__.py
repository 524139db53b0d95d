"""Core utilities: deterministic random streams, logging and resources."""
