"""
Look up one course on the Kean self-service catalog and return its sections
grouped by academic term.
"""
__version__ = "0.1.0"
