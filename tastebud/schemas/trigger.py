"""Trigger Schemas — document events delivered by the event substrate.

Invariants:
    - Created events carry `document`; updated events carry `before` and `after`
    - Documents are passed through as dicts: required-field checks happen in
      TriggerDispatch, where a malformed document is logged and skipped instead of
      rejected (a 4xx would only make the substrate redeliver it)
"""

from pydantic import BaseModel


class TriggerEnvelope(BaseModel):
    """Full document state for one delivery (no partial diffs)."""
    event_id: str | None = None
    document: dict | None = None
    before: dict | None = None
    after: dict | None = None

    def payload(self) -> dict:
        return {
            "document": self.document,
            "before": self.before,
            "after": self.after,
        }
