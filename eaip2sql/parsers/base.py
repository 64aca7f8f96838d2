import re
import logging
from abc import ABC
from typing import List

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# sdParams / sdTooltip spans carry data-model annotations, not published text
IGNORED_CLASSES = {'sdParams', 'sdTooltip'}


class EAIPHtmlParser(ABC):
    """Shared helpers for parsers of Eurocontrol-format (MakeAIP) eAIP HTML pages."""

    def _soup(self, html_data: bytes) -> BeautifulSoup:
        """Decode raw page bytes into a BeautifulSoup tree, dropping annotation spans."""
        html_content = html_data.decode('utf-8', errors='ignore')
        soup = BeautifulSoup(html_content, 'html.parser')
        for span in soup.find_all('span', class_=lambda c: c and set(c.split()) & IGNORED_CLASSES):
            span.decompose()
        return soup

    def _extract_text(self, element) -> str:
        """
        Extract text content from a BeautifulSoup element.

        Args:
            element: BeautifulSoup element, or None

        Returns:
            Extracted text with whitespace collapsed
        """
        if element is None:
            return ""

        # Handle plain text nodes (NavigableString)
        if not hasattr(element, 'name') or element.name is None:
            return re.sub(r'\s+', ' ', str(element)).strip()

        text = element.get_text(separator=' ', strip=True)
        return re.sub(r'\s+', ' ', text).strip()

    def _row_cells(self, row) -> List[str]:
        """Text of each cell of a table row."""
        return [self._extract_text(cell) for cell in row.find_all(['td', 'th'])]
