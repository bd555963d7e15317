"""Content safety checks."""

from .guard import SafetyGuard, SafetyVerdict, TeachingVerdict

__all__ = ["SafetyGuard", "SafetyVerdict", "TeachingVerdict"]
