"""Tile vocabulary, level data model and the level generators."""
