"""HTML sanitizing, article extraction, feed discovery, date parsing and feed records for a news reader."""

__version__ = "0.1.0"