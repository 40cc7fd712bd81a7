"""
Patient registration, the in-memory patient registry and medical history.
"""
