"""Hydroponic monitoring backend: alert relay, admin CRUD proxy and Multiplant range resolver."""

__version__ = "1.0.0"
