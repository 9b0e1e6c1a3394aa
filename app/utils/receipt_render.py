from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from html import escape

from app.schemas.receipt import ReceiptData

BUSINESS_INFO = {
    "name": "The Royal Pavilion",
    "tagline": "Luxury Hotel & Resort",
    "company": "Laxman Takkekar Hospitality",
    "address": "Plot No. 28, Hockey Stadium Rd, opp. IT Park, B Ward, Datta Colony, Kolhapur, Maharashtra 416012",
    "phone": "+91 8600467805, +91 8600357805",
    "email": "support@theroyalpavilion.in",
    "website": "theroyalpavilion.in",
}

TERMS_AND_CONDITIONS = [
    "Check in Time: <strong>12 PM</strong>, Check Out Time: <strong>10 AM</strong>",
    "Early Check In and late Check Out can be extended Subject to Room availability.",
    "All Guest(s) Address ID proof is mandatory, except child below 7 Years Old.",
    "For Extra Persons in the room, we will provide only floor mattress.",
    "The Management does not take the responsibility for loss of valuables/Cash left by Guest(s) in the rooms.",
    "Visitors are Not Permitted in the Guest Room.",
    "Pets are not allowed in the Hotel Premises.",
    "Outside Food and Beverages not allowed.",
    "Room Preferences will be Subject to availability.",
]

GOLD = "#D4AF37"
CELL = "padding: 12px 15px; border-bottom: 1px solid #ddd;"
AMOUNT_CELL = "text-align: right; " + CELL


def format_currency(amount) -> str:
    """Format rupees with Indian digit grouping and no decimals (₹1,23,456)."""
    value = int(Decimal(str(amount or 0)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if value < 0 else ""
    digits = str(abs(value))

    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])

    return f"{sign}₹{digits}"


def format_date(value, fmt: str = "%d %b %Y", fallback: str = "N/A") -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime(fmt)
    return fallback


def plural(count: int, word: str, suffix: str = "s") -> str:
    return f"{count} {word}{'' if count == 1 else suffix}"


def _row(label: str, amount: str, style: str = "") -> str:
    return (
        f'<tr><td style="{CELL}{style}">{label}</td>'
        f'<td style="{AMOUNT_CELL}{style}">{amount}</td></tr>'
    )


def _charge_rows(data: ReceiptData) -> str:
    rows = []
    nights = data.nights or 1
    room_count = data.room_count or 1

    if data.price_per_night:
        rows.append(_row("Room Rate", f"{format_currency(data.price_per_night)} × {plural(room_count, 'room')}"))
        rows.append(_row("Stay Duration", plural(nights, "night")))
        rows.append(_row("Room Total", format_currency(data.price_per_night * room_count * nights)))

    if data.extra_guests:
        rows.append(_row(f"Extra Guests ({data.extra_guests})", format_currency(data.extra_guest_charges)))

    if data.with_breakfast and data.breakfast_price:
        total_guests = data.adults + data.children
        rows.append(_row(
            "Breakfast",
            f"{format_currency(data.breakfast_price)} × {plural(total_guests, 'person')} × {plural(nights, 'night')}",
        ))
        rows.append(_row("Breakfast Total", format_currency(data.breakfast_total)))

    if data.promo_code and data.discount_amount:
        original = data.original_price or data.price + data.discount_amount
        rows.append(_row("Original Price", format_currency(original)))
        rows.append(_row(
            f"Promo Discount ({escape(data.promo_code)})",
            f"- {format_currency(data.discount_amount)}",
            " color: #22c55e;",
        ))

    rows.append(_row("Base Price", format_currency(data.price)))
    rows.append(_row("CGST (6.1%)", format_currency(data.cgst)))
    rows.append(_row("SGST (6.1%)", format_currency(data.sgst)))
    return "\n".join(rows)


def render_receipt_html(data: ReceiptData) -> str:
    """Render the printable booking receipt."""
    info = BUSINESS_INFO
    guest_line = plural(data.adults, "Adult")
    if data.children:
        guest_line += f", {plural(data.children, 'Child', 'ren')}"

    phone_line = f'<p><strong>Phone:</strong> {escape(data.customer_phone)}</p>' if data.customer_phone else ""
    qr_block = (
        f'<div style="position: absolute; top: 0; right: 0;">'
        f'<img src="{data.qr_code_data}" width="80" height="80" alt="QR Code" />'
        f'<p style="text-align: center; font-size: 10px;">Scan to view your booking</p></div>'
        if data.qr_code_data else ""
    )
    paid_stamp = (
        '<div class="paid-stamp" style="position: absolute; top: 120px; right: 40px; '
        'transform: rotate(15deg); border: 4px solid #22c55e; color: #22c55e; '
        'padding: 8px 16px; font-weight: bold;">PAID IN FULL</div>'
        if data.paid_stamp else ""
    )
    terms = "\n".join(f"<li>{t}</li>" for t in TERMS_AND_CONDITIONS)

    return f"""
<div class="receipt" style="font-family: 'Playfair Display', serif; max-width: 800px; margin: 0 auto; padding: 20px; color: #333; position: relative;">
  {paid_stamp}
  <div style="background: {GOLD}; height: 10px; margin-bottom: 30px;"></div>

  <div style="text-align: center; margin-bottom: 30px;">
    <p style="color: {GOLD}; font-size: 18px; font-weight: 600;">{info['company']}</p>
    <h1 style="color: {GOLD}; margin: 0;">{info['name']}</h1>
    <p style="font-style: italic;">{info['tagline']}</p>
    <p>{info['address']}</p>
    <p>{info['phone']} | {info['email']}</p>
    <p>{info['website']}</p>
  </div>

  <h2 style="text-align: center; border-top: 2px solid {GOLD}; border-bottom: 2px solid {GOLD}; padding: 15px;">BOOKING RECEIPT</h2>

  <div style="display: flex; justify-content: space-between; margin-bottom: 30px;">
    <div style="width: 48%;">
      <h3 style="color: {GOLD};">Guest Information</h3>
      <p><strong>Name:</strong> {escape(data.customer_name)}</p>
      <p><strong>Email:</strong> {escape(data.customer_email)}</p>
      {phone_line}
      <p><strong>Guests:</strong> {guest_line}</p>
    </div>
    <div style="width: 48%; position: relative;">
      <h3 style="color: {GOLD};">Receipt Details</h3>
      <p><strong>Receipt No:</strong> {data.receipt_number}</p>
      <p><strong>Transaction Date:</strong> {format_date(data.transaction_date, "%d %b %Y, %H:%M:%S", "Transaction date not recorded")}</p>
      <p><strong>Payment Method:</strong> {escape(data.payment_method)}</p>
      <p><strong>Transaction ID:</strong> {escape(data.payment_id)}</p>
      {qr_block}
    </div>
  </div>

  <h3 style="color: {GOLD};">Booking Details</h3>
  <div style="background-color: #f9f9f9; padding: 15px; border-left: 3px solid {GOLD};">
    <p><strong>Room:</strong> {escape(data.room_name)}</p>
    <p><strong>Room Type:</strong> {escape(data.room_type or 'Standard')}</p>
    <p><strong>Rooms Booked:</strong> {plural(data.room_count or 1, 'room')}</p>
    <p><strong>Check-in Date:</strong> {format_date(data.check_in_date, fallback="Date not specified")}</p>
    <p><strong>Check-out Date:</strong> {format_date(data.check_out_date, fallback="Date not specified")}</p>
    <p><strong>Nights:</strong> {data.nights or 1}</p>
  </div>

  <table style="width: 100%; border-collapse: collapse; margin: 30px 0;">
    <thead>
      <tr style="background-color: {GOLD};">
        <th style="text-align: left; padding: 12px 15px; color: #fff;">Description</th>
        <th style="text-align: right; padding: 12px 15px; color: #fff;">Amount</th>
      </tr>
    </thead>
    <tbody>
      {_charge_rows(data)}
      <tr style="font-weight: bold; background-color: #f2f2f2;">
        <td style="padding: 12px 15px;">Total Paid</td>
        <td style="text-align: right; padding: 12px 15px;">{format_currency(data.total)}</td>
      </tr>
    </tbody>
  </table>

  <div style="margin-top: 40px; border-top: 1px dashed {GOLD}; padding-top: 20px; text-align: center;">
    <p style="font-size: 18px; color: {GOLD};">Thank you for choosing {info['name']}</p>
    <p>For any inquiries regarding this booking, please contact our reservations team:</p>
    <p>{info['email']} | {info['phone']}</p>
    <div style="text-align: left; margin-top: 30px; padding: 15px; border: 1px solid {GOLD};">
      <p style="font-weight: bold;">Terms &amp; Conditions:</p>
      <ol style="font-size: 12px;">
        {terms}
      </ol>
    </div>
  </div>

  <div style="background: {GOLD}; height: 10px; margin-top: 30px;"></div>
</div>
"""
