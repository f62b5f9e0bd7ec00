"""Alert texts sent to the owner's Telegram chat (Markdown parse mode)."""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from app.constants.healthcare import DOCTOR_ARRIVAL_TIME, RESPONSE_TIME, SERVICE_CITIES
from app.domain.activity import DailySummary
from app.domain.lead import PhoneClick, ValidatedLead

IST = ZoneInfo("Asia/Kolkata")

_MARKDOWN_SPECIALS = ("_", "*", "`", "[")


def escape_markdown(text: str) -> str:
    """Escapes Telegram legacy Markdown control characters."""
    for char in _MARKDOWN_SPECIALS:
        text = text.replace(char, f"\\{char}")
    return text


def format_ist(moment: datetime | None) -> str:
    """Formats a timestamp the way Indian locales print it (dd/mm/yyyy, hh:mm:ss am)."""
    local = (moment or datetime.now(UTC)).astimezone(IST)
    return f"{local:%d/%m/%Y, %I:%M:%S} {local:%p}".lower()


def build_lead_alert(lead: ValidatedLead) -> str:
    return (
        "🚨 *NEW DOCTOR BOOKING* 🚨\n"
        "\n"
        f"👤 *Patient:* {lead.name}\n"
        f"🎂 *Age:* {lead.age} years\n"
        f"📱 *Phone:* {lead.phone}\n"
        f"📍 *Location:* {lead.city.upper()}\n"
        f"🩺 *Service:* {escape_markdown(lead.service)}\n"
        "\n"
        f"⏰ *Time:* {format_ist(lead.timestamp)}\n"
        f"📊 *Source:* {escape_markdown(lead.source)}\n"
        "\n"
        f"🎯 *ACTION REQUIRED:* Call patient within {RESPONSE_TIME}!\n"
        f"🚑 *Doctor dispatch within {DOCTOR_ARRIVAL_TIME}*"
    )


def build_phone_click_alert(click: PhoneClick) -> str:
    location = escape_markdown(click.city) if click.city else "Unknown Location"
    return (
        "📞 *PHONE BUTTON CLICKED* 📞\n"
        "\n"
        f"📱 *Number Called:* {escape_markdown(click.phone_number)}\n"
        f"🎯 *Button Location:* {click.source.upper()}\n"
        f"📍 *City Page:* {location}\n"
        f"⏰ *Time:* {format_ist(click.timestamp)}\n"
        f"🖥️ *Device:* {click.device}\n"
        "\n"
        "💡 *Note:* User clicked call button - high intent lead!\n"
        "🎯 *ACTION:* Be ready to receive call or call back if missed"
    )


def build_daily_report(summary: DailySummary) -> str:
    city_lines = "\n".join(
        f"• {name}: {summary.leads_by_city.get(key, 0)}"
        for key, name in SERVICE_CITIES.items()
    )
    return (
        f"📊 *DAILY REPORT - {summary.day:%a %b %d %Y}* 📊\n"
        "\n"
        f"📝 *Form Submissions:* {summary.form_submissions}\n"
        f"📞 *Phone Button Clicks:* {summary.phone_clicks}\n"
        f"🎯 *Total Leads:* {summary.total_leads}\n"
        "\n"
        "🏙️ *Bookings by City:*\n"
        f"{city_lines}\n"
        "\n"
        "🔒 Patient details are only ever sent in the individual booking alerts."
    )
