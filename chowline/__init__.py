"""
Chowline - Menu discovery backend for a food-ordering marketplace.

Example:
    >>> from chowline.domains.search import ProximitySearchEngine, SearchCriteria
    >>> engine = ProximitySearchEngine(store)
    >>> page = await engine.search(SearchCriteria(latitude=6.5244, longitude=3.3792))
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
