"""
Core models, processing and helpers
"""
