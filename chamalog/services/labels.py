"""Shipping labels: 100 x 150 mm PDF with a QR code carrying the order's tracking URL."""

import base64
import io
import logging
from datetime import date
from urllib.parse import unquote, urlparse

from reportlab.graphics import renderPDF
from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing
from reportlab.lib.colors import HexColor
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas
from sqlalchemy.orm import Session

from chamalog.core.errors import NotFoundError
from chamalog.models import Order, Store
from chamalog.services.activity_log import record_activity

logger = logging.getLogger(__name__)

PAGE_WIDTH = 100 * mm
PAGE_HEIGHT = 150 * mm
MARGIN = 10
QR_SIZE = 80

BRAND_NAME = "ChamaLog"
BRAND_TAGLINE = "Fast Delivery"
BRAND_URL = "www.chamalog.com"
BRAND_COLOR = HexColor("#FF6200")
TEXT_COLOR = HexColor("#333333")
RULE_COLOR = HexColor("#CCCCCC")


def tracking_payload(code: str, base_url: str) -> str:
    """What the label's QR code encodes: <base_url>/<code>."""
    return f"{base_url.rstrip('/')}/{code}"


def extract_code(payload: str) -> str:
    """
    Inverse of tracking_payload. Accepts the full tracking URL or a bare code
    (couriers may type the code printed under the QR code).
    """
    payload = payload.strip()
    if "://" in payload:
        path = urlparse(payload).path.rstrip("/")
        return unquote(path.rsplit("/", 1)[-1]) if path else ""
    return payload


def _top(y: float) -> float:
    """Convert a distance from the top edge into reportlab's bottom-up y."""
    return PAGE_HEIGHT - y


def _rule(pdf: canvas.Canvas, y: float) -> None:
    pdf.saveState()
    pdf.setStrokeColor(RULE_COLOR)
    pdf.setDash(5, 5)
    pdf.line(15, _top(y), PAGE_WIDTH - 15, _top(y))
    pdf.restoreState()


def _wrapped(pdf: canvas.Canvas, text: str, x: float, y: float, width: float, font: str, size: int) -> None:
    pdf.setFont(font, size)
    for i, line in enumerate(simpleSplit(text, font, size, width)):
        pdf.drawString(x, _top(y + size + i * (size + 2)), line)


def _draw_qr(pdf: canvas.Canvas, payload: str, x: float, y: float, size: float) -> None:
    widget = QrCodeWidget(payload)
    x1, y1, x2, y2 = widget.getBounds()
    drawing = Drawing(size, size, transform=[size / (x2 - x1), 0, 0, size / (y2 - y1), 0, 0])
    drawing.add(widget)
    renderPDF.draw(drawing, pdf, x, _top(y + size))


def render_label(order: Order, store: Store, tracking_base_url: str, issued_on: date | None = None) -> bytes:
    """Render the printable label for an order and return the PDF bytes."""
    issued_on = issued_on or date.today()
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
    pdf.setTitle(f"{BRAND_NAME} label {order.code}")

    pdf.setStrokeColor(BRAND_COLOR)
    pdf.rect(MARGIN, MARGIN, PAGE_WIDTH - 2 * MARGIN, PAGE_HEIGHT - 2 * MARGIN)

    pdf.setFillColor(BRAND_COLOR)
    pdf.setFont("Helvetica-Bold", 14)
    pdf.drawString(15, _top(34), BRAND_NAME)
    pdf.setFillColor(TEXT_COLOR)
    pdf.setFont("Helvetica", 10)
    pdf.drawString(15, _top(47), BRAND_TAGLINE)
    _rule(pdf, 60)

    pdf.setFillColor(HexColor("#000000"))
    pdf.setFont("Helvetica-Bold", 12)
    pdf.drawString(15, _top(102), "Recipient:")
    _wrapped(pdf, order.recipient, 15, 105, 150, "Helvetica", 11)
    _wrapped(pdf, order.full_address, 15, 122, 150, "Helvetica", 10)

    _draw_qr(pdf, tracking_payload(order.code, tracking_base_url), 180, 90, QR_SIZE)

    pdf.setFont("Helvetica-Bold", 12)
    pdf.drawString(15, _top(182), "Order:")
    pdf.setFont("Helvetica", 11)
    pdf.drawString(15, _top(197), order.code)
    pdf.setFont("Helvetica", 10)
    pdf.drawString(15, _top(212), f"Issued: {issued_on.strftime('%d/%m/%Y')}")
    _rule(pdf, 260)

    pdf.setFont("Helvetica-Bold", 12)
    pdf.drawString(15, _top(292), "Sender:")
    _wrapped(pdf, store.name, 15, 295, 150, "Helvetica", 11)
    _wrapped(pdf, store.address, 15, 312, 150, "Helvetica", 10)
    _rule(pdf, 390)

    pdf.setFillColor(BRAND_COLOR)
    pdf.setFont("Helvetica", 10)
    pdf.drawCentredString(PAGE_WIDTH / 2, _top(410), BRAND_URL)

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def generate_order_label(session: Session, order_id: int, actor_id: int, tracking_base_url: str) -> str:
    """Render the label for an order, log it, and return the PDF as base64."""
    order = session.get(Order, order_id)
    if order is None:
        raise NotFoundError("Order not found.")
    store = session.get(Store, order.store_id)
    if store is None:
        raise NotFoundError("Origin store not found.")
    pdf_bytes = render_label(order, store, tracking_base_url)
    record_activity(session, f"Label generated for order #{order.code}", actor_id)
    session.commit()
    logger.info("Label generated for order %s (%d bytes)", order.id, len(pdf_bytes))
    return base64.b64encode(pdf_bytes).decode("ascii")
