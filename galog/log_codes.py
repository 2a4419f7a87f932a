"""
Log codes for translation and delivery operations.
"""

TRANSLATE = "translate"
TRANSLATE_FILTERED = f"{TRANSLATE}.filtered"
TRANSLATE_NOTHING_TO_SEND = f"{TRANSLATE}.nothing_to_send"
TRANSLATE_SLICED = f"{TRANSLATE}.sliced"
TRANSLATE_MAX_EVENTS_CLAMPED = f"{TRANSLATE}.max_events_clamped"

# Parameters
PARAM = f"{TRANSLATE}.param"
PARAM_DUPLICATE_DROPPED = f"{PARAM}.duplicate_dropped"
PARAM_CAP_REACHED = f"{PARAM}.cap_reached"
PARAM_DEPTH_LIMIT = f"{PARAM}.depth_limit"
EVENT_NAME_FALLBACK = f"{TRANSLATE}.event_name_fallback"

# Identity
IDENTITY = "identity"
IDENTITY_CLIENT_ID_RESOLVED = f"{IDENTITY}.client_id_resolved"
IDENTITY_MACHINE_ID_UNAVAILABLE = f"{IDENTITY}.machine_id_unavailable"

# Delivery
DELIVERY = "delivery"
DELIVERY_SLICE_SENT = f"{DELIVERY}.slice_sent"
DELIVERY_SLICE_FAILED = f"{DELIVERY}.slice_failed"
DELIVERY_BATCH_FAILED = f"{DELIVERY}.batch_failed"

# Batching handler
HANDLER = "handler"
HANDLER_FLUSH = f"{HANDLER}.flush"
HANDLER_RETRY_EXHAUSTED = f"{HANDLER}.retry_exhausted"
HANDLER_RECORD_DROPPED = f"{HANDLER}.record_dropped"
HANDLER_QUEUE_FULL = f"{HANDLER}.queue_full"
HANDLER_BATCH_FAILED = f"{HANDLER}.batch_failed"
