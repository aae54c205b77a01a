"""Task engine for the to-do list.

This package provides the task model, the in-memory store that owns the
collection, and the view filter used by the front end.
"""
