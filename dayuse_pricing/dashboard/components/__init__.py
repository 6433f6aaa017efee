"""Reusable Streamlit widgets for the front-desk dashboard."""
