"""
Shared service utilities.

- http.py - requests sessions with retry/backoff and default timeout
"""
