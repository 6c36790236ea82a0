"""
Migrations package for the FilmMate record store.
"""
