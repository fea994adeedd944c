"""Subcommand groups."""
