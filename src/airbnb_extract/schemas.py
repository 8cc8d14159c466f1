"""Inclusion schemas for the data islands of search and listing pages.

Each schema maps a field name to ``KEEP`` or to a nested schema; see
``transform.select_by_schema``.
"""

from __future__ import annotations

from typing import Any

from .transform import KEEP

SEARCH_RESULT_SCHEMA: dict[str, Any] = {
    "demandStayListing": {
        "id": KEEP,
        "description": KEEP,
        "location": KEEP,
    },
    "badges": {
        "text": KEEP,
    },
    "structuredContent": {
        "mapCategoryInfo": {"body": KEEP},
        "mapSecondaryLine": {"body": KEEP},
        "primaryLine": {"body": KEEP},
        "secondaryLine": {"body": KEEP},
    },
    "avgRatingA11yLabel": KEEP,
    "listingParamOverrides": KEEP,
    "structuredDisplayPrice": {
        "primaryLine": {"accessibilityLabel": KEEP},
        "secondaryLine": {"accessibilityLabel": KEEP},
        "explanationData": {
            "title": KEEP,
            "priceDetails": {
                "items": {
                    "description": KEEP,
                    "priceString": KEEP,
                },
            },
        },
    },
}

PAGINATION_SCHEMA: dict[str, Any] = {
    "nextPageCursor": KEEP,
    "pageCursors": KEEP,
}

# Keyed by the page section's ``sectionId``; sections not listed are dropped.
LISTING_SECTION_SCHEMAS: dict[str, dict[str, Any]] = {
    "LOCATION_DEFAULT": {
        "lat": KEEP,
        "lng": KEEP,
        "subtitle": KEEP,
        "title": KEEP,
    },
    "POLICIES_DEFAULT": {
        "title": KEEP,
        "houseRulesSections": {
            "title": KEEP,
            "items": {"title": KEEP},
        },
    },
    "HIGHLIGHTS_DEFAULT": {
        "highlights": {"title": KEEP},
    },
    "DESCRIPTION_DEFAULT": {
        "htmlDescription": {"htmlText": KEEP},
    },
    "AMENITIES_DEFAULT": {
        "title": KEEP,
        "seeAllAmenitiesGroups": {
            "title": KEEP,
            "amenities": {"title": KEEP},
        },
    },
}
