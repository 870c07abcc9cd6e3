"""
Application package.

Layout:

* ``core`` - settings, logging, errors and database plumbing
* ``engine`` - pure scoring and selection rules
* ``services`` - store adapter and use-case orchestration
* ``schemas`` - pydantic request/response models
* ``api`` - versioned FastAPI routers
"""

from .main import app  # noqa: F401
