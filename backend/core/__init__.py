"""
Shared building blocks used by every feature: settings, logging, errors and
security.  Feature-specific SQL and business logic live in the feature
packages (``auth/``, ``posts/``).
"""
