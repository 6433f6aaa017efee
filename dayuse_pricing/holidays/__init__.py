"""
Package marker for public-holiday lookup under `dayuse_pricing.holidays`.
The source module talks HTTP; the classifier module owns the per-year cache.
"""
