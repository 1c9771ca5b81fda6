"""Observability helpers for Linear Tickets."""
