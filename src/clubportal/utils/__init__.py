"""Shared utilities for the club portal."""
