"""
Procedural terrain synthesis by iterative grid refinement.
"""

__version__ = "0.1.0"
