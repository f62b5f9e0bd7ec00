"""API: edge layer of the lead service.

Responsibilities:
- Receive requests from the website (forms, telemetry)
- Validate and normalize untrusted payloads
- Apply per-client rate limits

Subpackages:
- validators/: pure validation of inbound payloads
- routes/: HTTP endpoints

MUST NOT contain: alert delivery, storage or scheduling logic.
"""
