"""
Draft strategy adjustment engine for live fantasy football drafts.
"""

__version__ = '1.0.0'
