"""Command handlers for ``python -m sales_intel``."""
