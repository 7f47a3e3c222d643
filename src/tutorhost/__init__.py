"""Tutorhost - interactive tutorial exercise server."""
