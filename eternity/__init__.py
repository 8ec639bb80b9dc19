"""
Eternity - family-history health risk analysis.
"""
__version__ = "1.0.0"
