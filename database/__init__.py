"""
Database Package - MongoDB access for the bookstore collection
"""

from .mongodb import BookstoreDB, open_db

__all__ = ["BookstoreDB", "open_db"]
