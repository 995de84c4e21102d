"""EazyFind restaurant search service."""
