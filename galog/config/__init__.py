from .identity import require_api_secret, require_measurement_id, resolve_client_id
from .options import SinkOptions

__all__ = [
    "SinkOptions",
    "require_api_secret",
    "require_measurement_id",
    "resolve_client_id",
]
