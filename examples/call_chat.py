"""
Example Python client for the dashboard assistant.

This script sends natural language commands to the /chat endpoint and prints
the reply, the applied action tags and the resulting dashboard state.
"""
import os
import sys
from typing import Any, Dict

import httpx

# Configuration
API_URL = os.environ.get("API_URL", "http://localhost:8000")


class ChatError(Exception):
    """Custom exception for chat API errors."""
    pass


def send_command(query: str) -> Dict[str, Any]:
    """
    Send one command to the /chat endpoint.

    Args:
        query: Natural language command

    Returns:
        The chat response body
    """
    try:
        response = httpx.post(f"{API_URL}/chat", json={"query": query}, timeout=30.0)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        raise ChatError(f"HTTP error {e.response.status_code}: {e.response.text}")
    except httpx.HTTPError as e:
        raise ChatError(f"Request error: {str(e)}")


def get_state() -> Dict[str, Any]:
    response = httpx.get(f"{API_URL}/state", timeout=30.0)
    response.raise_for_status()
    return response.json()


def main():
    queries = sys.argv[1:] or [
        "Show only pressure sensors",
        "Switch to 1-week history",
        "Hide B-annulus pressure",
        "Use spline chart",
    ]
    for query in queries:
        try:
            result = send_command(query)
        except ChatError as e:
            print(f"Error: {str(e)}")
            sys.exit(1)
        source = result.get("source")
        if result.get("is_fallback"):
            source = f"{source}, fallback"
        print(f"> {query}")
        print(f"  {result['message']['text']} [{source}]")
        for tag in result.get("tags", []):
            print(f"  ✓ {tag}")

    state = get_state()
    print(f"\nMode: {state['mode']}  live: {state['live_key']}  history: {state['hist_key']}  "
          f"chart: {state['chart_type']}")
    print(f"Visible: {', '.join(state['visible']) or '(none)'}")


if __name__ == "__main__":
    main()
