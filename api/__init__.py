"""
REST API for the data receiver.

Accepts JSON data submissions on POST /data and lists stored records,
optionally filtered by origin and date, on GET /data.
"""

__version__ = "1.0.0"
