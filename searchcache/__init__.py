"""
SearchCache: TTL result cache with lookup analytics in front of an external search.
"""

__version__ = "0.1.0"
