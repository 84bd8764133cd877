"""skillpack — declarative batch installer for skills.sh skills."""

__version__ = "0.1.0"
