"""Errors raised while searching, loading and tracking movies"""


class MovieSearchError(Exception):
    """Base error; ``message`` is what the user gets to see"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NetworkError(MovieSearchError):
    """The request never produced a usable response"""

    def __init__(
        self, message: str = "The network misbehaved. Could not fetch these movies."
    ):
        super().__init__(message)


class NoResultsError(MovieSearchError):
    """OMDb answered, but with ``Response: "False"``"""

    def __init__(
        self, message: str = "Could not fetch these movies. The query returned nothing."
    ):
        super().__init__(message)


class NothingSelectedError(MovieSearchError):
    """Add-to-watched was requested while no movie detail is loaded"""

    def __init__(self, message: str = "Select a movie before adding it to the list."):
        super().__init__(message)
