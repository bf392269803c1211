"""Retrieval and response-routing engine behind the portfolio chat widget."""

__version__ = "0.3.0"
