"""
QR code generation for guest attendance tokens
"""

import io
import qrcode

from guest_console.core.config import settings

class QRService:
    """Service for generating QR codes"""

    @staticmethod
    def generate_token_qr(guest_id: str, format: str = 'PNG', box_size: int = 10) -> bytes:
        """QR code whose payload is exactly the guest id, scanned at reception"""
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=box_size,
            border=4,
        )
        qr.add_data(guest_id)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        img.save(buffer, format=format)
        return buffer.getvalue()

    @staticmethod
    def get_qr_url(guest_id: str) -> str:
        """Public URL of the guest's QR image"""
        return f"{settings.BASE_URL.rstrip('/')}/invitations/{guest_id}/qr.png"
