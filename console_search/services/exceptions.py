"""Domain-specific exceptions."""


class SearchError(Exception):
    pass


class FetchError(SearchError):
    """Raised when the search endpoint cannot be reached or answers garbage."""


class UnresolvableNavigation(SearchError):
    pass
