"""
API Service Layer

Bridges HTTP routes and the domain: validates request bodies into commands,
picks the demo store or the live bridge, and maps failures to API errors.
"""
