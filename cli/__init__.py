"""Command line interface for querying weather station data."""
