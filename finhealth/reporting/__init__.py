"""
finhealth.reporting - Report formatting and export.

Modules:
  formatters - ASCII terminal formatters for Typer CLI commands.
  export     - JSON / CSV / Parquet export helpers.
"""
