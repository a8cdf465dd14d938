"""winsweep - safe cache and temp cleanup for Windows.

Enumerates well-known cache locations and deletes them only after every
path has passed the safety gate.
"""

__version__ = "0.1.0"
