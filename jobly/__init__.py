"""Jobly: data access for companies and the jobs they post."""

__version__ = "1.0.0"
