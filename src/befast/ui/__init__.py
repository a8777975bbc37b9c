"""Inbound surfaces: HTTP API and command line."""
