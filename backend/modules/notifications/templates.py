"""
Email templates, one per notification type.

Each renderer takes the request and the send time and returns the subject
and HTML body. All interpolated values are HTML-escaped.
"""

from datetime import datetime, timezone
from html import escape
from typing import Any, Callable, Optional

from .models import EmailNotificationRequest, NotificationType, RenderedEmail


Renderer = Callable[[EmailNotificationRequest, str], RenderedEmail]


def _text(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    return escape(str(value))


def _format_time(now: datetime) -> str:
    return now.strftime("%m/%d/%Y, %I:%M:%S %p UTC")


def _render_stock_request(req: EmailNotificationRequest, sent_at: str) -> RenderedEmail:
    data = req.request_data
    company = _text(req.company_name, "Your Company")
    raw_job_number = (data.job_number if data else None) or "N/A"
    job_number = escape(raw_job_number)

    subject = req.subject or f"[{req.company_name or 'Company'}] New Stock Request - Job #{raw_job_number}"

    if data and data.items:
        items_html = "".join(
            f"<li><strong>{_text(item.item_name, 'Unknown')}</strong>"
            f" - Quantity: {_text(item.quantity, '0')}</li>"
            for item in data.items
        )
    else:
        items_html = "<li>No items specified</li>"

    notes_html = f"<h3>Notes:</h3><p>{escape(data.notes)}</p>" if data and data.notes else ""

    html = (
        f"<h2>New Stock Request - {company}</h2>"
        "<p>A new stock request has been submitted by a technician.</p>"
        "<h3>Request Details:</h3>"
        "<ul>"
        f"<li><strong>Company:</strong> {_text(req.company_name, 'N/A')}</li>"
        f"<li><strong>User:</strong> {_text(data.user_name if data else None, 'Unknown')}</li>"
        f"<li><strong>Job Number:</strong> {job_number}</li>"
        f"<li><strong>Date:</strong> {_text(data.date if data else None, sent_at)}</li>"
        "</ul>"
        "<h3>Requested Items:</h3>"
        f"<ul>{items_html}</ul>"
        f"{notes_html}"
        "<p>Please review and process this request in the admin panel.</p>"
    )
    return RenderedEmail(subject=subject, html=html)


def _render_purchase(req: EmailNotificationRequest, sent_at: str) -> RenderedEmail:
    data = req.purchase_data
    subject = f"New Purchase - {req.company_name or 'Inventory System'}"
    html = (
        "<h2>New Purchase Notification</h2>"
        "<p>A new purchase has been made from the company store.</p>"
        "<h3>Purchase Details:</h3>"
        "<ul>"
        f"<li><strong>User:</strong> {_text(data.user_name if data else None, 'Unknown')}</li>"
        f"<li><strong>Item:</strong> {_text(data.item_name if data else None, 'Unknown')}</li>"
        f"<li><strong>Quantity:</strong> {_text(data.quantity if data else None, '0')}</li>"
        f"<li><strong>Total:</strong> ${_text(data.total if data else None, '0')}</li>"
        f"<li><strong>Date:</strong> {sent_at}</li>"
        "</ul>"
        "<p>The item has been removed from the user's inventory.</p>"
    )
    return RenderedEmail(subject=subject, html=html)


def _render_low_stock(req: EmailNotificationRequest, sent_at: str) -> RenderedEmail:
    company = _text(req.company_name, "Your Company")
    subject = req.subject or f"[{req.company_name or 'Company'}] Low Stock Alert"

    if req.items is not None:
        rows = "".join(
            f"<li><strong>{escape(item.name)}</strong> - Only {item.quantity} remaining"
            f" (Min: {_text(item.min_quantity, 'N/A')})</li>"
            for item in req.items
        )
        html = (
            f"<h2>Low Stock Alert - {company}</h2>"
            "<p>The following items are running low in stock:</p>"
            f"<ul>{rows}</ul>"
            "<p>Please consider restocking these items.</p>"
        )
    else:
        html = (
            f"<h2>Low Stock Alert - {company}</h2>"
            f"<p>{_text(req.message, 'Low stock alert triggered.')}</p>"
        )
    return RenderedEmail(subject=subject, html=html)


def _render_tech_low_stock(req: EmailNotificationRequest, sent_at: str) -> RenderedEmail:
    data = req.tech_low_stock_data
    company = _text(req.company_name, "Your Company")
    subject = req.subject or f"[{req.company_name or 'Company'}] Technician Low Stock Alert"
    html = (
        f"<h2>Technician Low Stock Alert - {company}</h2>"
        "<p>A technician's inventory is running low and requires attention.</p>"
        "<h3>Alert Details:</h3>"
        "<ul>"
        f"<li><strong>Technician:</strong> {_text(data.tech_email if data else None, 'Unknown')}</li>"
        f"<li><strong>Item:</strong> {_text(data.item_name if data else None, 'Unknown')}</li>"
        f"<li><strong>Remaining Quantity:</strong> {_text(data.remaining_quantity if data else None, '0')}</li>"
        f"<li><strong>Minimum Required:</strong> {_text(data.min_quantity if data else None, 'N/A')}</li>"
        f"<li><strong>Alert Time:</strong> {sent_at}</li>"
        "</ul>"
        "<p>Please consider processing a stock request for this technician or contact them"
        " directly to manage their inventory levels.</p>"
    )
    return RenderedEmail(subject=subject, html=html)


def _render_user_activity(req: EmailNotificationRequest, sent_at: str) -> RenderedEmail:
    data = req.activity_data
    subject = f"User Activity Alert - {req.company_name or 'Inventory System'}"
    html = (
        "<h2>User Activity Notification</h2>"
        f"<p><strong>User:</strong> {_text(data.user_name if data else None, 'Unknown')}</p>"
        f"<p><strong>Action:</strong> {_text(data.action if data else None, 'Unknown')}</p>"
        f"<p><strong>Details:</strong> {_text(data.details if data else None, 'No details')}</p>"
        f"<p><strong>Time:</strong> {sent_at}</p>"
    )
    return RenderedEmail(subject=subject, html=html)


def _render_test(req: EmailNotificationRequest, sent_at: str) -> RenderedEmail:
    subject = req.subject or f"Test Email - {req.company_name or 'Inventory System'}"
    html = _text(req.message, "This is a test email from your inventory system.")
    return RenderedEmail(subject=subject, html=html)


def _render_default(req: EmailNotificationRequest, sent_at: str) -> RenderedEmail:
    subject = req.subject or f"Notification - {req.company_name or 'Inventory System'}"
    html = _text(req.message, "You have a new notification.")
    return RenderedEmail(subject=subject, html=html)


RENDERERS: dict[str, Renderer] = {
    NotificationType.STOCK_REQUEST.value: _render_stock_request,
    NotificationType.PURCHASE.value: _render_purchase,
    NotificationType.LOW_STOCK.value: _render_low_stock,
    NotificationType.TECH_LOW_STOCK.value: _render_tech_low_stock,
    NotificationType.USER_ACTIVITY.value: _render_user_activity,
    NotificationType.TEST.value: _render_test,
}


def render_email(
    request: EmailNotificationRequest,
    now: Optional[datetime] = None,
) -> RenderedEmail:
    """Render the subject and body for a request; unknown types use the default template."""
    sent_at = _format_time(now or datetime.now(timezone.utc))
    renderer = RENDERERS.get(request.type, _render_default)
    return renderer(request, sent_at)
