"""
adapters.cli - typer/rich command-line front end.
"""
