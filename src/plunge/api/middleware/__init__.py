"""
API Middleware - Request/response processing

Only exception handling lives here: every error leaves the API as a flat
{"error", "message"} JSON body.
"""
