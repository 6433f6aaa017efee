"""Page renderers for the front-desk dashboard."""
