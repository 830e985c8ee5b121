"""
Rift Reunion application package.

Finds the League of Legends and Teamfight Tactics matches two players shared.
"""

__version__ = "1.0.0"
__author__ = "Rift Reunion Team"
