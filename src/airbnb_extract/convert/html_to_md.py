from __future__ import annotations

from bs4 import BeautifulSoup
from markdownify import markdownify as md


def _clean_soup_inplace(soup: BeautifulSoup) -> None:
    for tag_name in ["script", "style", "noscript"]:
        for t in soup.find_all(tag_name):
            t.decompose()


def html_to_markdown(html: str) -> str:
    """Render a listing's HTML description as compact Markdown."""

    soup = BeautifulSoup(html, "html.parser")
    _clean_soup_inplace(soup)
    markdown = md(str(soup), heading_style="ATX")
    lines = [ln.rstrip() for ln in markdown.splitlines()]
    out: list[str] = []
    for ln in lines:
        # Collapse runs of blank lines.
        if not ln and (not out or not out[-1]):
            continue
        out.append(ln)
    return "\n".join(out).strip()
