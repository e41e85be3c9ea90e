"""precheck - pre-submission EOL-style and copyright-year compliance checks."""

__version__ = "0.1.0"
