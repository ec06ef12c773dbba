from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup, Tag

DEFAULT_DOCUMENT = '<ul class="places"></ul>'


class HtmlListPanel:
    """List panel kept as an HTML document, one ``<li data-id>`` per place."""

    def __init__(self, html: Optional[str] = None):
        self.soup = BeautifulSoup(html or DEFAULT_DOCUMENT, "html.parser")
        container = self.soup.find("ul", class_="places")
        if container is None:
            raise ValueError('document has no <ul class="places"> container')
        self.container: Tag = container

    def _entry(self, identity: str) -> Optional[Tag]:
        return self.container.find("li", attrs={"data-id": identity}, recursive=False)

    def insert_entry(self, identity: str, html: str) -> None:
        entry = BeautifulSoup(html, "html.parser").find("li")
        if entry is None or entry.get("data-id") != identity:
            raise ValueError(f"entry markup for {identity} must be an <li data-id> element")
        if self._entry(identity) is not None:
            raise ValueError(f"entry {identity} is already rendered")
        self.container.append(entry.extract())

    def remove_entry(self, identity: str) -> bool:
        entry = self._entry(identity)
        if entry is None:
            return False
        entry.decompose()
        return True

    def entry_ids(self) -> list[str]:
        return [li["data-id"] for li in self.container.find_all("li", recursive=False)]

    def identity_at(self, element: Tag) -> Optional[str]:
        """Return the id of the entry containing ``element`` (a click target)."""
        if element.name == "li" and element.has_attr("data-id"):
            return element["data-id"]
        entry = element.find_parent("li", attrs={"data-id": True})
        return entry["data-id"] if entry else None

    def titles(self) -> list[tuple[str, str]]:
        out = []
        for li in self.container.find_all("li", recursive=False):
            title = li.find(class_="place__title")
            out.append((li["data-id"], title.get_text(strip=True) if title else ""))
        return out

    def render(self) -> str:
        return str(self.soup)
