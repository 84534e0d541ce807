"""Storefront catalog service for a computer-hardware reseller."""

__version__ = "1.0.0"
