"""API layer for Roster Continuity.

Use cases, formatters, validators and the command line entry point.
"""
