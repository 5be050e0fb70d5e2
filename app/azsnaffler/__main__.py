"""Allow running as ``python -m azsnaffler``."""

from azsnaffler.cli.main import app

app()
