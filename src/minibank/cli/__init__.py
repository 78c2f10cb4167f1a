"""CLI package for minibank."""
