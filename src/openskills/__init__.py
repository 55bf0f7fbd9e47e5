"""openskills: install, list, read, sync and remove agent skills."""

__version__ = "0.1.0"
