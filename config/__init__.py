"""
Configuration package for devsetup.
"""
