"""
Bookmark resource: router (HTTP), service (validation/serialization),
repository (raw SQL).
"""
