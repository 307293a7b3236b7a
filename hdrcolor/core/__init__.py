"""hdrcolor.core — Foundation layer.

Contains the Color value type, palettes, image conversion, configuration
and the report builder. Only stdlib, numpy and PIL are allowed here.
"""
