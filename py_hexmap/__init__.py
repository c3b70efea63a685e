"""
Procedural hex map generation: random regions with greedy terrain colouring.
"""

__version__ = "0.1.0"
