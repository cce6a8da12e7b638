# The module is to define the web search adapter that uses the Tavily AI Search API.
# Date: 2026-10-18
# Version: 0.1.0

import asyncio
from typing import Any, Callable, Dict, Optional

from tavily import TavilyClient

from vault_assistant.services.credentials import load_credential
from vault_assistant.services.vault import VaultService
from vault_assistant.utils.logger import console


class WebSearchService:
    """
    Answers a query with a synthesized answer plus ranked result snippets.

    The Tavily key is loaded lazily from the vault on first use; a missing key
    is reported as text so the model (or the user) can see it.
    """

    def __init__(self, vault: VaultService, key_file: str = "tavily_api_key.txt",
                 client_factory: Callable[[str], Any] = TavilyClient):
        self._vault = vault
        self._key_file = key_file
        self._client_factory = client_factory
        self._client: Optional[Any] = None

    def initialize(self):
        api_key = load_credential(self._vault, self._key_file)
        if api_key:
            self._client = self._client_factory(api_key)
            console.info("Tavily API Key loaded.")

    async def search(self, query: str) -> str:
        if self._client is None:
            self.initialize()
        if self._client is None:
            return "Error: Tavily API Key missing."

        console.info(f"Searching the web for: '{query}'")
        try:
            response = await asyncio.to_thread(
                self._client.search,
                query=query,
                search_depth="basic",
                include_answer=True,
                max_results=5,
            )
        except Exception as e:
            console.exception(f"An error occurred during Tavily search for query: '{query}'")
            return f"Error searching web: {e}"

        return self._format_results(response)

    def _format_results(self, response: Dict) -> str:
        """
        Formats the JSON response from Tavily into a markdown string.
        Args:
            response (Dict): The JSON response from the Tavily search.
        Returns:
            str: The direct answer, if any, followed by the result list.
        """
        formatted_string = ""
        if response.get("answer"):
            formatted_string += f"Direct Answer: {response['answer']}\n\n"

        results = response.get("results", [])
        if results:
            formatted_string += "Search Results:\n"
            for result in results:
                formatted_string += f"- [{result.get('title', 'N/A')}]({result.get('url', 'N/A')}): {result.get('content', '')}\n"

        return formatted_string or "No search results found."
