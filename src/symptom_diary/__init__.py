"""Symptom diary with food trigger correlation analysis."""

__version__ = "0.1.0"
