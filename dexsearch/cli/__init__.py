"""Command-line interface for dexsearch."""
