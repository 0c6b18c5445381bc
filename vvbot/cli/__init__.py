"""CLI module for vvbot."""
