"""CLI commands for minibank."""
