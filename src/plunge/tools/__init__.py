"""Command-line diagnostics"""
