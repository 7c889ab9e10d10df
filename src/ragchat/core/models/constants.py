"""Role and event constants."""

# ---------------------------------------------------------------------------
# Message roles -- the names used when rendering history as text.
# ---------------------------------------------------------------------------

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

# ---------------------------------------------------------------------------
# Tracing correlation events
# ---------------------------------------------------------------------------

EVENT_TYPE_WRAPPER = "wrapper"
EVENT_TAG_FINAL = "final"

# RunnableConfig metadata keys used when threading an event into LangChain.
METADATA_EVENT_ID = "event_id"
METADATA_EVENT_TYPE = "event_type"
