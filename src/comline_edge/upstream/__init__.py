from .client import build_http_client
from .decoder import decode_envelope, interpret_response
from .models import UpstreamCustomerData, UpstreamEnvelope, UpstreamProductRecord
from .query import build_product_url, sanitize_url_for_logging

__all__ = [
    "build_http_client",
    "build_product_url",
    "sanitize_url_for_logging",
    "decode_envelope",
    "interpret_response",
    "UpstreamCustomerData",
    "UpstreamEnvelope",
    "UpstreamProductRecord",
]
