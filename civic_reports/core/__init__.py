"""
Core configuration, error taxonomy and logging setup.
"""
