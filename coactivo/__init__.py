"""
Coactivo case processing worker.
"""
__version__ = '0.3.0'
