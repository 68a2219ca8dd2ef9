"""Middleware components for Flask apps using the JSON helpers.

- error_handler.py: Map helper errors and HTTP errors to JSON responses
"""
