"""
HTTP header names used by the Klevu APIs.
"""

API_HEADER_KEY_TIMESTAMP = "X-KLEVU-TIMESTAMP"
API_HEADER_KEY_APIKEY = "X-KLEVU-APIKEY"
API_HEADER_KEY_AUTH_ALGO = "X-KLEVU-AUTH-ALGO"
API_HEADER_KEY_CONTENT_TYPE = "Content-Type"
API_HEADER_KEY_RESTAPIKEY = "X-KLEVU-RESTAPIKEY"
API_HEADER_KEY_AUTHORIZATION = "Authorization"

# Headers covered by the bearer token signature, in signing order
SIGNED_HEADER_KEYS = (
    API_HEADER_KEY_TIMESTAMP,
    API_HEADER_KEY_APIKEY,
    API_HEADER_KEY_AUTH_ALGO,
    API_HEADER_KEY_CONTENT_TYPE,
)
