"""Version information for the Salt Edge Partner SDK"""

__version__ = "0.1.0"
