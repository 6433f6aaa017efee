"""
Package marker for the day-use pricing assistant.
It groups the holiday, prediction, pricing, storage, and dashboard modules under one import path.
Most functionality lives in the sub-packages; this file intentionally stays lightweight.
"""
