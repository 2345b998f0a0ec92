"""
finhealth.taxonomy - Questionnaire answer buckets.

Modules:
  buckets - StrEnum buckets, display labels and dollar midpoints.
"""
