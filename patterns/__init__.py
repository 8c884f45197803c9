"""Reusable patterns for building service verticals.

Each module demonstrates a self-contained pattern that can be adapted
to any domain: currently the in-memory repository layer.
"""
