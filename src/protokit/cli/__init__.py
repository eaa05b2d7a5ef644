"""Command-line interface for protokit."""
