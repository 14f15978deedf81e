"""Header Audit - License header compliance auditing for source trees."""

__version__ = "0.1.0"
