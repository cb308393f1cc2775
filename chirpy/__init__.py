"""A small microblogging HTTP API for users and chirps, stored in SQLite."""

__version__ = "0.1.0"