"""garbage - FreeDesktop-compliant trash for the command line.

Moves files into the trash instead of deleting them, keeps the
.trashinfo records needed to restore them, and picks the right
trash directory for every mount point.
"""

__version__ = "0.1.0"
