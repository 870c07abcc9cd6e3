"""
Pure scoring and selection rules.

Nothing in this package performs I/O; services feed it values read
from the store and persist whatever it decides.
"""
