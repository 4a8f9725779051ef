"""
pagecraft - visual page builder service
Layout tree editing plus AI translation of layouts into code.
"""

__version__ = "0.1.0"
