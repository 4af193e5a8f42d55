"""
Catalog browsing for the client side.

CatalogBrowser fetches the public listings and falls back to the bundled
samples when the live catalog is empty, so a fresh deployment still has
something to show. filter_listings() applies the search box and tag chips
locally.
"""

import copy
import logging
from typing import Iterable, List, Optional

import httpx

from eventgo.client.samples import SAMPLE_EVENTS, SAMPLE_HACKATHONS, SAMPLE_INTERNSHIPS, SAMPLE_JOBS

logger = logging.getLogger(__name__)


def _organization_name(item: dict) -> str:
    org = item.get("company") or item.get("college") or {}
    return org.get("name") or ""


def filter_listings(
    items: Iterable[dict],
    search: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    location: Optional[str] = None,
) -> List[dict]:
    """
    Keep listings that match every given filter.

    - search: case-insensitive substring of title, description or organization name
    - tags: any one of the selected tags (events) or skills (opportunities)
    - location: case-insensitive substring of location/city
    """
    needle = (search or "").strip().lower()
    wanted = {t.lower() for t in (tags or []) if t}
    place = (location or "").strip().lower()

    results = []
    for item in items:
        if needle:
            haystack = [item.get("title"), item.get("description"), _organization_name(item)]
            if not any(needle in (field or "").lower() for field in haystack):
                continue
        if wanted:
            labels = item.get("tags") or item.get("skills_required") or []
            if not wanted.intersection(label.lower() for label in labels):
                continue
        if place:
            where = item.get("location") or item.get("city") or ""
            if place not in where.lower():
                continue
        results.append(item)
    return results


class CatalogBrowser:
    """Public listing pages: jobs, internships, hackathons and events."""

    def __init__(self, base_url: str = "http://localhost:8000", http: Optional[httpx.Client] = None):
        self.http = http or httpx.Client(base_url=base_url.rstrip("/"), timeout=15.0)

    def _fetch(self, path: str, params: dict, samples: List[dict]) -> List[dict]:
        try:
            response = self.http.get(path, params=params)
            response.raise_for_status()
            items = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Catalog fetch %s failed: %s", path, e)
            items = []
        # a fresh copy so callers can mutate what they get
        return items or copy.deepcopy(samples)

    def _opportunities(self, kind: str, samples: List[dict], filters: dict) -> List[dict]:
        items = self._fetch("/api/opportunities", {"type": kind}, samples)
        return filter_listings(items, **filters) if filters else items

    def jobs(self, **filters) -> List[dict]:
        return self._opportunities("job", SAMPLE_JOBS, filters)

    def internships(self, **filters) -> List[dict]:
        return self._opportunities("internship", SAMPLE_INTERNSHIPS, filters)

    def hackathons(self, **filters) -> List[dict]:
        return self._opportunities("hackathon", SAMPLE_HACKATHONS, filters)

    def events(self, **filters) -> List[dict]:
        items = self._fetch("/api/events", {}, SAMPLE_EVENTS)
        return filter_listings(items, **filters) if filters else items
