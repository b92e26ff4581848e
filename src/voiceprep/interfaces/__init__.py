"""Entry-point adapters for the CLI and HTTP API."""
