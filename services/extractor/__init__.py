"""Pull the title, article body and lead image out of an arbitrary web page."""

from .extractor import ContentExtractor

__all__ = ["ContentExtractor"]
