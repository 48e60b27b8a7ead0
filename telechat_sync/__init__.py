"""
telechat-sync: mirrors the documents on upcoming IESG telechat agendas into
date-named local directories.
"""

__version__ = "1.0.0"
