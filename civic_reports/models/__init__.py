"""
Pydantic models for reports and request/response shapes.
"""
