"""Command line interface for Veriform."""
