"""Himatikom blog backend."""
