"""Command-line adapter for LocalHistory."""
