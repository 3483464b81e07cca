"""Fetch random OEIS sequences and post them to Mastodon."""

__version__ = "0.1.0"
