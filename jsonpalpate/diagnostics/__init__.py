"""
Diagnostics built on the parse ladder: feature detection and linting.
"""
