"""
Ingestion layer - profile files into validated UserProfile objects.

Submodules:
  profile_loader - JSON / CSV profile parser and the sample template.
"""
