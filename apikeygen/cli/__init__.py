"""Command-line interface for apikeygen."""
