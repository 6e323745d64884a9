"""
Cal Poly Pomona program catalog scraper.

Collects the bachelor program listing (college, department, major),
normalizes program names, enriches each major with a description, and
persists the result to a JSON file and a PostgreSQL database.
"""
