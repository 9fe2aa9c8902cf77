"""
greatreads.reporting — terminal formatting and flat-file export.

Modules:
  formatters — ASCII terminal formatters for Typer CLI commands.
  export     — CSV/JSON flat-file export helpers.
"""
