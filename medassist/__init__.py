"""
MedAssist - hospital workflow backend.

Patient registration, OPD slips, identification logging and AI-assisted
clinical drafts (symptom analysis, report summaries, notes, prescriptions).
"""
