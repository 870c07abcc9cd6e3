"""
Version 1 of the API.

Breaking changes to the HTTP contract belong in a new version
subpackage (e.g. ``v2``).
"""
