"""Wellness platform backend: AI health assistant relay and admin helpers."""

__version__ = "1.0.0"
