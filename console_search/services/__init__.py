from console_search.services.classifier import classify, is_rejected
from console_search.services.controller import SearchController
from console_search.services.fetcher import SuggestionFetcher
from console_search.services.grouping import group
from console_search.services.navigation import resolve_path

__all__ = [
    "SearchController",
    "SuggestionFetcher",
    "classify",
    "group",
    "is_rejected",
    "resolve_path",
]
