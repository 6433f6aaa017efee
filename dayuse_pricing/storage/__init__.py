"""
Package marker for local persistence under `dayuse_pricing.storage`.
Table DDL and the per-property store live in the sibling modules.
"""
