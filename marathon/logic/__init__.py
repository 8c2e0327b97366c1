"""Core business logic layer.

Subpackages:
- progression: day entry generation, restart recalculation, status machine, integrity checks
- reporting: per-plan statistics and dashboard summaries
- plans: lifecycle operations combining the above with a plan repository
"""
__all__ = ["progression", "reporting", "plans"]
