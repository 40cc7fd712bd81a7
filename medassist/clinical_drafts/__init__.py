"""
AI-assisted clinical drafts.

This module provides:
- Request validation that runs before any generation call
- The draft generation adapter and its backends
- The prescription section extractor for free-text drafts
"""
