"""
Iconify API Layer.

This package handles all communication with the remote icon API.
"""

from .client import IconFetcher, IconifyClient, build_icon_url, split_icon_spec

__all__ = ["IconFetcher", "IconifyClient", "build_icon_url", "split_icon_spec"]
