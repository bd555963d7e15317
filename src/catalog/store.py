"""Product text files rendered per facet."""

import re
from pathlib import Path

import structlog

from shared_types import Facet
from variants import VariantChooser

from .models import CatalogEntry
from .parser import parse_catalog_entry, render_view_facet

logger = structlog.get_logger()

# Marker present in every "not found" rendering; resolvers test for it.
NOT_FOUND = "tidak ditemukan"

MULTI_PACKAGE_FOLLOWUPS = (
    "Ingin paket yang mana, Kak? Ada beberapa pilihan durasi nih 😊",
    "Mau pilih yang mana? Bisa disesuaikan sama budget dan kebutuhan 😊",
    "Tertarik sama paket yang mana? Semuanya udah include garansi penuh lho 😊",
    "Paket mana yang cocok buat Kak? Kalau bingung bisa tanya-tanya dulu 😊",
    "Dari pilihan di atas, mana yang sesuai budget Kak? 😊",
    "Ada yang menarik dari paket-paket tersebut? Atau butuh penjelasan lebih detail? 😊",
    "Pilihan mana yang pas buat Kak? Semua paket berkualitas premium kok 😊",
    "Kira-kira cocok yang mana ya? Bisa konsultasi dulu kalau masih bingung 😊",
)

SINGLE_PACKAGE_FOLLOWUPS = (
    "Gimana, Kak? Tertarik sama {product}? 😊",
    "Cocok gak sama kebutuhan? Mau order atau ada yang ditanyakan lagi? 😊",
    "Bagaimana menurut Kak? Harga dan fiturnya sesuai ekspektasi? 😊",
    "Tertarik untuk order {product}? Atau ada yang mau ditanyakan dulu? 😊",
)

_DURATION_WORD = re.compile(r"Bulan|Hari|Tahun")


def is_not_found(text: str | None) -> bool:
    return not text or NOT_FOUND in text


class CatalogStore:
    """Reads ``<products_dir>/<name>.txt``; the lowercased file stem is the canonical name."""

    def __init__(self, products_dir: str | Path, chooser: VariantChooser | None = None):
        self.products_dir = Path(products_dir).expanduser()
        self.chooser = chooser or VariantChooser()
        self._paths: dict[str, Path] = {}

    def _scan(self) -> dict[str, Path]:
        if not self.products_dir.is_dir():
            self._paths = {}
        else:
            self._paths = {p.stem.lower(): p for p in self.products_dir.glob("*.txt")}
        return self._paths

    def names(self) -> list[str]:
        return sorted(self._scan())

    def raw_text(self, name: str) -> str | None:
        key = name.lower()
        path = self._paths.get(key) or self._scan().get(key)
        if path is None:
            return None
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._paths.pop(key, None)
            return None
        except OSError as e:
            logger.warning("catalog_read_failed", product=name, error=str(e))
            return None

    def entry(self, name: str) -> CatalogEntry | None:
        raw = self.raw_text(name)
        if not raw or not raw.strip():
            return None
        return parse_catalog_entry(name, raw)

    def render_facet(self, name: str, facet: Facet) -> str:
        """Text answering ``facet`` for ``name``, or a not-found message."""
        raw = self.raw_text(name)
        if not raw or not raw.strip():
            return f"Data produk {name} tidak ditemukan."

        if facet in (Facet.PRICE, Facet.FULL):
            cleaned = raw.replace("`", "").replace("**", "*").strip()
            return f"{cleaned}\n\n{self.follow_up(name, raw)}"

        specific = render_view_facet(parse_catalog_entry(name, raw), facet)
        if specific:
            return specific
        return raw.strip()

    def follow_up(self, name: str, raw: str) -> str:
        if len(_DURATION_WORD.findall(raw)) > 1:
            return self.chooser.choose(MULTI_PACKAGE_FOLLOWUPS)
        product = name[:1].upper() + name[1:]
        return self.chooser.choose(SINGLE_PACKAGE_FOLLOWUPS).replace("{product}", product)
