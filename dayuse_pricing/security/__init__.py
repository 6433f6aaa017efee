"""
Package marker for the shared-password gate under `dayuse_pricing.security`.
This is local gate-keeping for a single front-desk terminal, not user authentication.
"""
