"""Request/response buffers for the single in-flight exchange of a context."""


class ExchangeBuffers:
    """Holds the serialized request body and raw response body of one exchange.

    Both slots are replaced by value on every exchange; they are not a cache
    and only the engine and the operation decoding the response read them.
    """

    def __init__(self):
        self.request_body: bytes | None = None
        self.response_body: bytes | None = None

    def load_request(self, body: bytes | None) -> None:
        """Start a new exchange: replace the request body, drop the old response."""
        self.request_body = body
        self.response_body = None

    def store_response(self, raw: bytes | None) -> None:
        self.response_body = raw

    def clear(self) -> None:
        self.request_body = None
        self.response_body = None
