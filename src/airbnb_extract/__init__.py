"""airbnb-extract core library.

This package fetches Airbnb search and listing pages, pulls the embedded JSON
data island out of the HTML and reshapes it into compact, LLM-friendly JSON.

Repo rules:
- Respect robots.txt unless the caller explicitly opts out.
- Keep extraction permissive: page structure drifts, so missing fields are
  skipped rather than treated as errors.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
