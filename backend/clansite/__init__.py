"""
Clan Site Backend
"""

__version__ = "0.1.0"
