"""
Document Retrieval Layer.

This package is responsible for downloading individual draft PDFs into the
per-date directory tree.
"""

from .downloader import DocumentDownloader

__all__ = ["DocumentDownloader"]
