"""Keyword-based mood detection for customer messages."""

import re
from enum import Enum


class MoodLabel(str, Enum):
    ANGRY = "angry"
    POSITIVE = "positive"
    OFF_TOPIC = "off_topic"
    NEUTRAL = "neutral"


# Evaluated top to bottom, first hit wins.
MOOD_TABLE: list[tuple[MoodLabel, tuple[str, ...]]] = [
    (
        MoodLabel.ANGRY,
        (
            "gak dapet", "kecewa", "kesel", "parah", "anjing", "kok lama",
            "udah nunggu", "masih belum", "gak jelas", "ga kelar2", "bosen",
            "sampe kapan", "kapan akun", "error terus", "gimana sih",
            "kok susah", "coba cek lagi", "udah capek", "ngaco", "payah",
            "tolol",
        ),
    ),
    (
        MoodLabel.POSITIVE,
        (
            "makasih", "thanks", "terima kasih", "oke kak", "cepat banget",
            "mantap", "sip", "lancar", "puas", "good job",
        ),
    ),
    (
        MoodLabel.OFF_TOPIC,
        (
            "curhat", "ngopi yuk", "iseng aja", "nongkrong", "gabut",
            "temenin aku", "ngobrol yuk", "main yuk", "ngomongin lain",
            "bukan order", "topik lain",
        ),
    ),
]

_QUESTION_MARKER = re.compile(r"(kenapa|kok|kapan)")
_TROUBLE_MARKER = re.compile(r"(dikirim|masuk|proses|error|gagal|akun)")


def detect_mood(message: str) -> MoodLabel:
    """Classify a message into a single mood label."""
    text = (message or "").lower()

    for label, keywords in MOOD_TABLE:
        if any(k in text for k in keywords):
            return label

    # "kapan akunnya dikirim?" reads as a complaint even without harsh words
    if _QUESTION_MARKER.search(text) and _TROUBLE_MARKER.search(text):
        return MoodLabel.ANGRY

    return MoodLabel.NEUTRAL
