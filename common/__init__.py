"""
Shared pieces: request/render dataclasses, time helpers, JSON logging.
"""
