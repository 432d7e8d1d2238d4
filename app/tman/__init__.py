"""tman - a versioned trash manager.

Moves files into a managed trash directory instead of unlinking them,
keeping every trashed revision restorable.
"""

__version__ = "1.0.0"
