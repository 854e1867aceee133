"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that the feature packages use
(DB wiring, settings, logging). Keep feature-specific SQL and request
handling in the corresponding feature package (e.g. `bookmarks/`).
"""
