from __future__ import annotations

import secrets

OTP_LENGTH = 6
OTP_EMAIL_SUBJECT = "OTP Verification for PlateGenie"

_OTP_EMAIL_TEMPLATE = """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: auto; border: 1px solid #ddd; border-radius: 8px; overflow: hidden;">
  <div style="background-color: #f4f4f4; padding: 20px; text-align: center;">
    <h2 style="color: #333;">PlateGenie OTP Verification</h2>
  </div>
  <div style="padding: 20px; text-align: center;">
    <p style="font-size: 16px; color: #555;">Use the OTP below to verify your email:</p>
    <h1 style="font-size: 36px; font-weight: bold; color: #007bff; margin: 20px 0;">{code}</h1>
    <p style="font-size: 14px; color: #888;">This code is valid for {minutes} minutes.</p>
  </div>
  <div style="background-color: #f4f4f4; padding: 15px; text-align: center; font-size: 12px; color: #888;">
    <p>If you did not make this request, please ignore this email.</p>
  </div>
</div>
"""


def generate_otp(length: int = OTP_LENGTH) -> str:
    """Uniformly random numeric code, zero-padded to `length` digits."""
    return str(secrets.randbelow(10 ** length)).zfill(length)


def render_otp_email(code: str, minutes: int) -> str:
    return _OTP_EMAIL_TEMPLATE.format(code=code, minutes=minutes)
