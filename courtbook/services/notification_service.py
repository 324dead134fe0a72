# courtbook/services/notification_service.py
"""
WhatsApp text for a status change, and the wa.me link that pre-fills it.

Nothing is sent from here: staff open the link by hand.
"""
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional
from urllib.parse import quote

from courtbook.db.enums import RequestStatus
from courtbook.logger import get_logger
from courtbook.models.court_request import CourtRequest

logger = get_logger(__name__)

WHATSAPP_BASE_URL = "https://wa.me/"

# same unreserved set as JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass
class Notification:
    message: str
    link: Optional[str] = None

    def to_dict(self) -> dict:
        return {"whatsappMessagePreview": self.message, "whatsappLink": self.link}


def format_date(value: date) -> str:
    """DD/MM/YYYY"""
    return f"{value.day:02d}/{value.month:02d}/{value.year}"


def clean_whatsapp_number(whatsapp: Optional[str]) -> str:
    if not whatsapp:
        return ""
    return re.sub(r"\D", "", whatsapp)


class NotificationService:

    def __init__(self, country_code: str = "55"):
        self.country_code = country_code

    def build_message(self, request: CourtRequest) -> str:
        formatted_date = format_date(request.date)
        time_range = f"{request.start_time} às {request.end_time}"
        observation = request.admin_observation
        status = request.status

        message = f"Olá, {request.user.name}.\n\n"

        if status == RequestStatus.APPROVED:
            message += "✅ Sua reserva da quadra do IFMA foi *APROVADA*.\n\n"
            message += f"📅 Data: {formatted_date}\n"
            message += f"⏰ Horário: {time_range}\n"
            if observation:
                message += f"\n📝 Observações:\n{observation}\n"
            message += "\nQualquer dúvida, procure a coordenação."

        elif status == RequestStatus.REJECTED:
            message += "❌ Sua reserva da quadra do IFMA *NÃO foi aprovada*.\n\n"
            message += f"📅 Data solicitada: {formatted_date}\n"
            message += f"⏰ Horário solicitado: {time_range}\n"
            if observation:
                message += f"\n📝 Motivo/Observações:\n{observation}\n"
            else:
                message += "\nPara mais informações, entre em contato com a coordenação."

        elif status == RequestStatus.CANCELLED:
            message += "🚫 Sua reserva da quadra do IFMA foi *CANCELADA*.\n\n"
            message += f"📅 Data: {formatted_date}\n"
            message += f"⏰ Horário: {time_range}\n"
            if observation:
                message += f"\n📝 Observações:\n{observation}\n"

        else:
            status_name = status.value if isinstance(status, RequestStatus) else str(status)
            message += f"Sua reserva da quadra do IFMA está com status: {status_name}.\n\n"
            message += f"📅 Data: {formatted_date}\n"
            message += f"⏰ Horário: {time_range}\n"

        return message

    def format_number(self, whatsapp: Optional[str]) -> str:
        number = clean_whatsapp_number(whatsapp)
        if not number:
            raise ValueError("Número de WhatsApp não encontrado para o aluno")
        if number.startswith(self.country_code):
            return number
        return f"{self.country_code}{number}"

    def build_link(self, request: CourtRequest, message: Optional[str] = None) -> str:
        number = self.format_number(request.user.whatsapp)
        if message is None:
            message = self.build_message(request)
        return f"{WHATSAPP_BASE_URL}{number}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"

    def build_notification(self, request: CourtRequest) -> Notification:
        """Message always; link only when the owner has a usable number."""
        message = self.build_message(request)
        try:
            link = self.build_link(request, message)
        except ValueError as e:
            logger.warning("No WhatsApp link for request %s: %s", request.id, e)
            link = None
        return Notification(message=message, link=link)
