"""Helper utilities for JSON over HTTP.

This package contains the request and response helpers:
- response_sink.py: Response sink protocol and in-memory sink
- response_formatter.py: Send JSON messages and data to a response sink
- request_parser.py: Decode size-bounded JSON request bodies
"""
