"""
Seed records loaded by insert_books
"""

from typing import List

from .models import Book


SEED_BOOKS: List[Book] = [
    Book("To Kill a Mockingbird", "Harper Lee", "Fiction", 1960, 12.99, True, 336, "J. B. Lippincott & Co."),
    Book("1984", "George Orwell", "Dystopian", 1949, 10.99, True, 328, "Secker & Warburg"),
    Book("The Great Gatsby", "F. Scott Fitzgerald", "Fiction", 1925, 9.99, True, 180, "Charles Scribner's Sons"),
    Book("Brave New World", "Aldous Huxley", "Dystopian", 1932, 11.50, False, 311, "Chatto & Windus"),
    Book("The Hobbit", "J.R.R. Tolkien", "Fantasy", 1937, 14.99, True, 310, "George Allen & Unwin"),
    Book("The Catcher in the Rye", "J.D. Salinger", "Fiction", 1951, 8.99, True, 224, "Little, Brown and Company"),
    Book("Pride and Prejudice", "Jane Austen", "Romance", 1813, 7.99, True, 432, "T. Egerton, Whitehall"),
    Book("The Lord of the Rings", "J.R.R. Tolkien", "Fantasy", 1954, 19.99, True, 1178, "Allen & Unwin"),
    Book("Animal Farm", "George Orwell", "Political Satire", 1945, 8.50, False, 112, "Secker & Warburg"),
    Book("The Alchemist", "Paulo Coelho", "Fiction", 1988, 10.99, True, 197, "HarperOne"),
    Book("Moby Dick", "Herman Melville", "Adventure", 1851, 12.50, False, 635, "Harper & Brothers"),
    Book("Wuthering Heights", "Emily Brontë", "Gothic Fiction", 1847, 9.99, True, 342, "Thomas Cautley Newby"),
]

