"""Core business logic layer.

Subpackages:
- planning: plan resolution policy and retention cleanup
- generation: AI content generation, output parsing and static fallback
- delivery: daily PDF/email job

HTTP routes and storage backends stay outside this package and are passed in.
"""
__all__ = ["planning", "generation", "delivery"]
