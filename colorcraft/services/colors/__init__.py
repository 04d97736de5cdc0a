"""
ColorCraft Colors Module

Provides color space conversions, frequency based pixel sampling, palette
categorization and color harmony generation for uploaded images.
"""

__version__ = "1.0.0"
