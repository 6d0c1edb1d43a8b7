"""
Static site server with a small demonstration JSON API.
"""

__version__ = "0.1.0"
