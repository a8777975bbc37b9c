"""Adapters connecting the tracking engine to external systems."""
