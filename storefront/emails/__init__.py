from .resend_client import EmailSendError, send_email
from .templates import render_download_email

__all__ = ["EmailSendError", "send_email", "render_download_email"]
