"""
EventFinder - live event search, artist enrichment and favorites
"""

__version__ = "1.0.0"
