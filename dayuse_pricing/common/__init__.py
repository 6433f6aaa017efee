"""
Package marker for cross-cutting helpers under `dayuse_pricing.common`.
Settings, logging, and database engine construction live in the sibling modules.
"""
