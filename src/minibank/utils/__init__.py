"""Utility functions for minibank."""
