"""
Small shared helpers for formatting output and building file names.
"""
