"""Per-context trace ids stamped onto every JSON log line."""

from __future__ import annotations

from contextvars import ContextVar
from uuid import uuid4


# Host applications may set this to propagate their own trace ids
trace_context: ContextVar[dict | None] = ContextVar("trace_context", default=None)


def get_trace_context() -> dict:
    """Return the current trace ids, minting a fresh pair on first use."""
    ctx = trace_context.get()
    if ctx is None or not ctx.get("trace_id"):
        ctx = {"trace_id": uuid4().hex, "span_id": uuid4().hex[:16]}
        trace_context.set(ctx)
    return ctx
