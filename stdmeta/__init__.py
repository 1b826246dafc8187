"""stdmeta - naming-standard and design-relation consistency engine."""

__version__ = "0.1.0"
