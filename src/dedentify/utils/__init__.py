"""
Utility helpers (console and logging).
"""
