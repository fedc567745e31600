"""
Bookstore seeding and query demonstrations on MongoDB
"""

__version__ = "1.0.0"
