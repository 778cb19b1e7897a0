"""
Core point-sequence model for GeoMeasure. Free of Qt imports.
"""
