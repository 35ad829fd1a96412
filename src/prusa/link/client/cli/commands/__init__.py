"""Subcommands of the `prusalink` CLI."""
