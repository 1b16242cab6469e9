"""HTTP primitives: immutable requests and responses plus the writer sink."""

from centra.http.headers import Headers, MutableHeaders
from centra.http.request import Request
from centra.http.response import Response
from centra.http.writer import ResponseWriter

__all__ = [
    "Headers",
    "MutableHeaders",
    "Request",
    "Response",
    "ResponseWriter",
]
