"""Scraper package — page fetch, content extraction and request pacing."""

from sitechat.scraper.extractor import extract_text
from sitechat.scraper.fetcher import fetch_url, make_client
from sitechat.scraper.models import PageRecord
from sitechat.scraper.pacing import paced

__all__ = ["fetch_url", "make_client", "extract_text", "paced", "PageRecord"]
