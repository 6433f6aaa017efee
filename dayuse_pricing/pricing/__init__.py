"""
Package marker for pricing under `dayuse_pricing.pricing`.
It holds the minimum-rate calculator, the static hotel directory, and the command-line report.
"""
