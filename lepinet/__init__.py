"""
LepiNet API: butterfly observation review and training curation service.
"""
__version__ = "0.1.0"
