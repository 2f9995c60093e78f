"""specific-page-subscriber: catalog page update tracking and tag-safe translation."""

__version__ = "0.1.0"
