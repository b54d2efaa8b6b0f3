"""Membership, budget, structure, participant and ranking bookkeeping for a poker club."""

__version__ = "0.1.0"