"""HTTP API for the run draft service."""
