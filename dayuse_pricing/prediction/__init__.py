"""
Package marker for day-use revenue prediction under `dayuse_pricing.prediction`.
Daily aggregation and the weekday/holiday averaging engine live in the sibling modules.
"""
