"""Allow running yao as ``python -m yao``."""

from yao.cli.main import app

app()
