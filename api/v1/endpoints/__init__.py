from . import scraper

__all__ = ["scraper"]
