"""
Storage engine bootstrap.
"""
