"""HTTP routes: inbound adapters of the public website.

Responsibilities:
- Define the HTTP endpoints (forms, telemetry, health)
- Rate limit per client before reading the body
- Delegate to validators and use cases
- Map outcomes to HTTP responses

Layout:
- routes/leads/: booking form submissions
- routes/error_tracking/: client-side error telemetry
- routes/phone_clicks/: "Call Now" button clicks
- routes/health/: liveness and readiness
- client.py: client identity and limiter helpers
- router.py: registers every router in the main app
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
