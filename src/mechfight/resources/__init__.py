"""Packaged data: default configuration and sample loadouts."""
