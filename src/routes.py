"""Client-side URL construction."""

from urllib.parse import quote, urlencode


class RouteBuilder:
    """
    Builds ``{base_url}/{name}?key=value...`` URLs.

    Parameters keep their given order, so a trailing empty ``xref`` leaves a URL
    the client completes by appending an individual's identifier.
    """

    def __init__(self, base_url: str = ""):
        self.base_url = base_url.rstrip("/")

    def route(self, name: str, params: dict[str, object]) -> str:
        query = urlencode([(key, "" if value is None else str(value)) for key, value in params.items()])
        path = f"{self.base_url}/{quote(name)}"
        return f"{path}?{query}" if query else path
