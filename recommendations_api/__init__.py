"""
Top-level package for the Music Recommendations API.

Makes ``recommendations_api`` importable so that modules can use fully
qualified names such as ``recommendations_api.app.main``.  All
functionality lives in the ``app`` subpackage.
"""

__all__ = []
