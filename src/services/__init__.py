"""Application services built on the feed parser and share codec."""

from .share_service import FilterOptions, ShareLink, ShareService, extract_share_code

__all__ = ["FilterOptions", "ShareLink", "ShareService", "extract_share_code"]
