"""DuckDuckGo web search tool."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Dict, List, Optional

import httpx
from bs4 import BeautifulSoup
from langchain_core.tools import BaseTool, tool

from heavyAgent.config.settings import SearchSettings

LOGGER = logging.getLogger(__name__)

DUCKDUCKGO_HTML_URL = "https://html.duckduckgo.com/html/"
SEARCH_TIMEOUT = 10.0

__all__ = ["create_search_tool", "parse_search_results"]


def parse_search_results(html: str, max_results: int) -> List[Dict[str, str]]:
    """Extract result entries from a DuckDuckGo HTML page.

    Args:
        html: Raw HTML of the results page
        max_results: Maximum number of entries to return

    Returns:
        List of ``{"title", "url", "snippet", "content"}`` dicts
    """
    soup = BeautifulSoup(html, "html.parser")
    results = []

    for element in soup.select(".result")[:max(max_results, 0)]:
        title_tag = element.select_one(".result__title a")
        url_tag = element.select_one(".result__url")
        snippet_tag = element.select_one(".result__snippet")

        title = title_tag.get_text(strip=True) if title_tag else ""
        url = ""
        if url_tag is not None and url_tag.get("href"):
            url = url_tag["href"]
        elif title_tag is not None and title_tag.get("href"):
            url = title_tag["href"]
        snippet = snippet_tag.get_text(strip=True) if snippet_tag else ""

        # Snippet doubles as content; full page fetching is left to the model
        results.append({"title": title, "url": url, "snippet": snippet, "content": snippet})

    return results


async def search_duckduckgo(
    query: str,
    max_results: int,
    user_agent: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """Run one DuckDuckGo query and return the tool payload."""
    try:
        async with httpx.AsyncClient(
            headers={"User-Agent": user_agent},
            timeout=SEARCH_TIMEOUT,
            follow_redirects=True,
            transport=transport,
        ) as client:
            response = await client.get(DUCKDUCKGO_HTML_URL, params={"q": query})
            response.raise_for_status()
    except httpx.HTTPError as e:
        LOGGER.warning(f"Search failed for {query!r}: {e}")
        return {"error": f"Search failed: {e}"}

    results = parse_search_results(response.text, max_results)
    LOGGER.info(f"Search {query!r} returned {len(results)} result(s)")
    return {"results": results}


def create_search_tool(
    settings: Optional[SearchSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> BaseTool:
    """Build the ``search_web`` tool bound to the search settings.

    Args:
        settings: Search section of the application settings
        transport: Optional httpx transport (tests use ``httpx.MockTransport``)
    """
    settings = settings or SearchSettings()

    @tool
    async def search_web(
        query: Annotated[str, "Search query to find information on the web"],
        max_results: Annotated[int, "Maximum number of search results to return"] = settings.max_results,
    ) -> Dict[str, Any]:
        """Search the web using DuckDuckGo for current information"""
        return await search_duckduckgo(query, max_results, settings.user_agent, transport)

    return search_web
