"""Constants shared across modules."""
from __future__ import annotations

SERVICE_NAME = "commons_autofill"

COMMONS_API = "https://commons.wikimedia.org/w/api.php"
WIKIDATA_API = "https://www.wikidata.org/w/api.php"
COMMONS_FILE_PAGE_BASE = "https://commons.wikimedia.org/wiki/File:"

CACHE_KEY = "rocklegends_commons_cache_v1"
FAVORITES_KEY = "rocklegends_favorites_v1"

FILE_NAMESPACE = 6
FILE_PREFIX = "File:"
IMAGE_PROPERTY = "P18"

NO_AUTHOR_PLACEHOLDER = "No author information"


class LOOKUP_SOURCE:
    WIKIDATA = "wikidata"
    COMMONS_SEARCH = "commons_search"
