"""Bulk tabular import pipeline for orders, quotes, contacts, and ingredients."""
