"""Job Search Tracker: record and follow up on job applications."""

__version__ = "0.2.0"
