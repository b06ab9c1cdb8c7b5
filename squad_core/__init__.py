# FILE: squad_core/__init__.py
"""
squad_core package: squad and team models, assignment, validation, persistence, autosave, IO, and export.
"""
__all__ = [
    "models",
    "outcomes",
    "board",
    "roster",
    "reconcile",
    "assignment",
    "validation",
    "persistence",
    "autosave",
    "generator",
    "session",
    "io",
    "export_cards",
    "config",
    "constants",
]
