"""
Package marker for day-use CSV ingestion under `dayuse_pricing.ingestion`.
Validation happens here so the prediction engine only ever sees well-formed records.
"""
