"""Booking-received and password-reset e-mail content."""

from html import escape


BOOKING_RECEIVED_SUBJECT = 'Your Holidays Planners Tour Request Reservation is Received!'

_BOOKING_RECEIVED_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>Booking Received - Holidays Planners</title>
    <style>
      body {{ background-color: #f5f5f5; font-family: Arial, sans-serif; margin: 0; }}
      .header {{ background-color: #009688; padding: 20px; text-align: center; }}
      .content {{ max-width: 600px; margin: 0 auto; padding: 20px; background-color: #fff; }}
      h1 {{ color: #333; font-size: 28px; text-align: center; }}
      p {{ color: #666; font-size: 16px; text-align: center; }}
      .footer {{ text-align: center; margin-top: 20px; font-size: 12px; color: #999; }}
    </style>
  </head>
  <body>
    <div class="header"></div>
    <div class="content">
      <h1>Booking Received - Holidays Planners</h1>
      <p>
        Dear {first_name},
        <br /><br />
        Thank you for booking a tour with Holidays Planners! We're excited to
        have you join us on this adventure. To complete your booking, please
        choose your preferred method of payment.
      </p>
    </div>
    <div class="footer">
      If you have any questions about the payment process, please reach out.
      <br /><br />
      Best regards,
    </div>
  </body>
</html>
"""


def greeting_name(display_name: str) -> str:
    """First word of the display name, the whole name when it has no spaces."""
    parts = (display_name or '').split()
    return parts[0] if parts else ''


def render_booking_received(*, display_name: str) -> str:
    return _BOOKING_RECEIVED_HTML.format(first_name=escape(greeting_name(display_name)))


PASSWORD_RESET_SUBJECT = 'Reset your Holidays Planners password'

_PASSWORD_RESET_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>Password Reset - Holidays Planners</title>
  </head>
  <body style="background-color: #f5f5f5; font-family: Arial, sans-serif;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px; background-color: #fff;">
      <h1 style="color: #333; text-align: center;">Password Reset - Holidays Planners</h1>
      <p style="color: #666; text-align: center;">
        Dear {first_name},
        <br /><br />
        We received a request to reset your password. Follow the link below to
        choose a new one. The link is short-lived and
        can only be used once.
        <br /><br />
        <a href="{reset_url}">Reset my password</a>
        <br /><br />
        If you did not ask for this, you can ignore this e-mail.
      </p>
    </div>
  </body>
</html>
"""


def render_password_reset(*, display_name: str, reset_url: str) -> str:
    return _PASSWORD_RESET_HTML.format(
        first_name=escape(greeting_name(display_name)),
        reset_url=escape(reset_url, quote=True),
    )
