"""
Command-Line Interface Layer.

This package contains the Typer application, the Rich progress display and
the console formatters.
"""
