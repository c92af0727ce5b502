"""Persistence store: ORM models and the SQLite database handle."""
