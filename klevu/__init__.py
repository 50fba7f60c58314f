"""
Python client SDK for the Klevu indexing APIs.

Validates records client-side, signs requests with an HMAC bearer token
and maps API outcomes onto a typed exception hierarchy.
"""

__version__ = "1.0.0"
