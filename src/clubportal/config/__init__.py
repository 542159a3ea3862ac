"""Configuration package for the club portal."""
