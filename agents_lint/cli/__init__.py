"""Command-line interface for agents-lint."""
