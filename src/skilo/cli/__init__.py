"""Skilo command-line interface."""
