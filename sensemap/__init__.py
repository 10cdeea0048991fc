"""Sense label mapping and exact-match scoring for word sense disambiguation runs."""
