"""Citation extraction from grounding metadata.

Flattens web and map grounding chunks into an ordered list of citations.
A map place is followed immediately by its review snippets.
"""

import logging

from backend.app.models.grounding import GroundingChunk
from backend.app.models.itinerary import Citation

logger = logging.getLogger(__name__)

REVIEW_LINK_TITLE = "Review Link"


def extract_citations_from_grounding(chunks: list[GroundingChunk] | None) -> list[Citation]:
    """Extract citations from grounding chunks, preserving source order.

    Args:
        chunks: Grounding metadata entries from the model reply (may be None)

    Returns:
        List of citations; empty when no metadata is present
    """
    citations: list[Citation] = []

    for chunk in chunks or []:
        if chunk.web is not None:
            if chunk.web.uri:
                citations.append(Citation(uri=chunk.web.uri, title=chunk.web.title))
        elif chunk.maps is not None:
            if chunk.maps.uri:
                citations.append(Citation(uri=chunk.maps.uri, title=chunk.maps.title))
            for snippet in chunk.maps.review_snippets:
                if snippet.uri:
                    citations.append(
                        Citation(uri=snippet.uri, title=snippet.title or REVIEW_LINK_TITLE)
                    )
        else:
            logger.debug("Skipping grounding chunk of unknown kind")

    return citations
