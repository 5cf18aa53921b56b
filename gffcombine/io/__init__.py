"""
Serialization models and the optional :mod:`gffutils` reader.
"""
