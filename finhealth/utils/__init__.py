"""
finhealth.utils - Shared helpers with no domain knowledge.

Modules:
  logging - configure_logging() and the JSON line formatter.
  numbers - half-up rounding, clamping and currency / percent formatting.
"""
