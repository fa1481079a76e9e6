"""
API Routes - HTTP endpoint handlers

Each equipment area gets its own router; all are included in the app
under /api.
"""
