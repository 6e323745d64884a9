"""Catalog listing and detail-page scraping."""
