"""azsnaffler - find credential-bearing files across Azure storage."""

__version__ = "0.3.0"
