"""Procedural Story Generator.

Assembles a short narrative from a genre template, a three-role cast, a set of
locations, three scripted story beats, a branching dialogue sample, and a
world-state ledger that records flags, events, relationships and metrics.
"""

__version__ = "0.1.0"
