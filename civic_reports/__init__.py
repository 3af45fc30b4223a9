"""
Civic Reports - local report store and triage workflow for citizen-submitted
civic issues (potholes, broken lights, garbage, ...).
"""

__version__ = "0.1.0"
