"""Property catalog: listings, provider approval, and search for a real-estate marketplace."""

__version__ = "0.1.0"
