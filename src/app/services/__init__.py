"""Application services.

Reusable orchestration units: fire-and-forget alert dispatch and the
end-of-day report loop. Concrete IO lives in app/infra/.
"""

from app.services.alert_dispatch import (
    active_alert_tasks,
    dispatch_alert,
    drain_alert_tasks,
)
from app.services.daily_report import (
    run_daily_report_loop,
    send_daily_report_now,
    seconds_until_next_run,
)

__all__ = [
    "active_alert_tasks",
    "dispatch_alert",
    "drain_alert_tasks",
    "run_daily_report_loop",
    "seconds_until_next_run",
    "send_daily_report_now",
]
