"""
iconpack-cli: swap a UI's icon set for icons downloaded from the Iconify API.
"""

__version__ = "1.0.0"
