"""App: core of the service: use cases, services and infrastructure.

Subpackages:
- bootstrap/: composition root (factories, initialization, wiring)
- use_cases/: accept a lead, record a phone click
- services/: alert dispatch and the daily report scheduler
- infra/: concrete IO (rate limiter stores, activity counter, Telegram)
- protocols/: contracts between layers
- domain/: lead, phone click, error report and daily summary models
- observability/: correlation ids for structured logs
- constants/: service catalogue and customer-facing messages

Pattern: app executes; api adapts; config configures; utils supports.
"""
