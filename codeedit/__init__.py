"""
Code Edit Workspace Server: search, fingerprinted file editing and a review
checklist for a local directory tree.
"""

__version__ = "0.1.0"
