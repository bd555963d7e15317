"""Generative fallback for messages nothing else could answer."""

import threading
from collections import defaultdict, deque

import structlog

from .base import LLMError, LLMProvider

logger = structlog.get_logger()

MAX_PROMPT_CHARS = 2000
MAX_HISTORY = 20

BUSINESS_CONTEXT = """\
Anda adalah customer service resmi Vylozzone, marketplace digital terpercaya untuk aplikasi premium.

IDENTITAS BISNIS:
• Vylozzone - Digital marketplace untuk aplikasi premium & streaming accounts
• Target: User Indonesia yang butuh akses aplikasi premium dengan harga terjangkau

KEBIJAKAN GARANSI & LAYANAN:
• Garansi mengikuti ketentuan masing-masing produk
• Pengiriman: Maksimal 1x24 jam setelah pembayaran confirmed
• Support: Via WhatsApp chat dengan tim CS

PROSEDUR CLAIM GARANSI:
• Customer kirim nomor order + screenshot kendala/error
• Tim CS review sesuai SOP dalam 1x24 jam
• Replace/refund sesuai ketentuan garansi

METODE PEMBAYARAN:
• QRIS (semua e-wallet: Dana, OVO, GoPay, ShopeePay)
• Transfer Bank: BCA, BRI, Mandiri, BNI

TONE & STYLE:
• Gunakan "Kak" untuk menyapa customer
• Selalu minta "nomor order dan screenshot" untuk troubleshooting
• Fokus pada solusi bisnis Vylozzone, bukan solusi teknis generik
• Professional namun ramah, solution-oriented

Berikan jawaban yang spesifik, singkat dan actionable. Jangan berikan solusi template generik."""


class GenerativeResponder:
    """Wraps an ``LLMProvider`` with the shop's context and per-sender history.

    Provider failures are logged and reported as ``None`` so callers can fall
    through to "no answer" instead of surfacing an error to the customer.
    """

    def __init__(
        self,
        provider: LLMProvider,
        system_prompt: str = BUSINESS_CONTEXT,
        max_tokens: int = 1000,
        max_history: int = MAX_HISTORY,
        max_prompt_chars: int = MAX_PROMPT_CHARS,
    ):
        self.provider = provider
        self.system_prompt = system_prompt
        self.max_tokens = max_tokens
        self.max_prompt_chars = max_prompt_chars
        self._history: dict[str, deque] = defaultdict(lambda: deque(maxlen=max_history))
        self._lock = threading.Lock()

    def respond(self, sender: str, message: str) -> str | None:
        prompt = (message or "").strip()[: self.max_prompt_chars]
        if not prompt:
            return None

        with self._lock:
            history = list(self._history[sender])
        messages = history + [{"role": "user", "content": prompt}]

        try:
            reply = self.provider.generate(
                messages, system=self.system_prompt, max_tokens=self.max_tokens
            )
        except LLMError as e:
            logger.warning(
                "generative_failed",
                provider=self.provider.provider_name,
                error=str(e),
            )
            return None

        reply = (reply or "").strip()
        if not reply:
            return None

        with self._lock:
            turns = self._history[sender]
            turns.append({"role": "user", "content": prompt})
            turns.append({"role": "assistant", "content": reply})
        logger.debug("generative_replied", provider=self.provider.provider_name, chars=len(reply))
        return reply

    def history(self, sender: str) -> list[dict]:
        with self._lock:
            return list(self._history.get(sender, ()))

    def clear(self, sender: str | None = None) -> None:
        with self._lock:
            if sender is None:
                self._history.clear()
            else:
                self._history.pop(sender, None)
