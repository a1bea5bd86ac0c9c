# src/services/matching_service/__init__.py
"""
Matching Service: HTTP API поверх движка матчинга.
"""
