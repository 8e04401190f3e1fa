"""Core business logic layer.

Subpackages:
- program: plan acceptance, session logging and the read-modify-write adapter
- reporting: dashboard summaries derived from a user's program state
"""
__all__ = ["program", "reporting"]
