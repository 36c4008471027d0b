"""Command implementations behind the fieldcheck CLI."""
