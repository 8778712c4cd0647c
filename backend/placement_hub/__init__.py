"""Placement Hub - coordinator backend for campus placements."""
