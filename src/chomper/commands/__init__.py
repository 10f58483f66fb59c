"""CLI commands for Chomper."""
