"""Steam train fuel caching simulator"""

__version__ = "0.1.0"
