"""
Package marker for the Streamlit front-desk dashboard under `dayuse_pricing.dashboard`.
Pages live in `page_views`, shared widgets in `components`.
"""
