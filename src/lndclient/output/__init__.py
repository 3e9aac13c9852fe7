"""Renders ServiceResult for humans or as JSON."""
