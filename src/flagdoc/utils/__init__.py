"""Utility helpers for flagdoc."""
