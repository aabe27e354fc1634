"""Command-line interface (``book-catalog``)."""
