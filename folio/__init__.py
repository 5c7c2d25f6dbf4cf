"""
resume2folio – portfolio sites from résumés or cloned portfolio pages.
"""

__version__ = "0.1.0"
