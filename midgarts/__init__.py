"""Readers for Ragnarok Online client data files and character animation."""

__version__ = "0.1.0"