"""Command-line interface for CDragon Assets."""
