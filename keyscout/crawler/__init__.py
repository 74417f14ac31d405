# keyscout/crawler/__init__.py
"""Crawl engine: fetching, link extraction, keyword matching and scheduling."""
