"""Utility helpers for flashmap."""
