class FetchError(Exception):
    """Base class for a failed price fetch. ``kind`` is stable for branching."""

    kind = "fetch_error"


class ProviderError(FetchError):
    """The provider could not be reached or answered with something unusable."""

    kind = "provider_error"


class ProviderUnreachable(ProviderError):
    kind = "provider_unreachable"


class MalformedResponse(ProviderError):
    kind = "malformed_response"


class NoDataError(FetchError):
    """The provider answered correctly but had no pairs for the token."""

    kind = "no_data"


class NoPairsFound(NoDataError):
    kind = "no_pairs_found"
