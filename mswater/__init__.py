"""
Surface water detection from WorldView multispectral imagery.
"""

__version__ = '0.1.0'
