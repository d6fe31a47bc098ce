"""HTTP API for best efforts."""
