"""Bookkeeping for observed network traffic: connections, hosts, notifications and reports."""

__version__ = "0.1.0"