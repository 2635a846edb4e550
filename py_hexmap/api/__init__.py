"""HTTP API for scenario generation."""
