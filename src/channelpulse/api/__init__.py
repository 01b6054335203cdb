"""HTTP API for channelpulse."""
