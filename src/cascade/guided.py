"""Step-by-step admin commands: recording buyers and warranty claims."""

import re
import time
from collections.abc import Callable
from datetime import date, datetime

import structlog

from storage import JsonStore

from . import texts
from .sessions import Session, SessionKey, SessionManager

logger = structlog.get_logger()

VALID_PRODUCTS = (
    "netflix", "disney", "youtube", "iqiyi", "viu", "wetv", "vision+", "vidio",
    "prime", "hbo", "bstation", "alightmotion", "chatgpt", "capcut",
)
START_COMMANDS = {
    "add buyer": "addbuyer",
    "addbuyer": "addbuyer",
    "add claim": "addclaim",
    "addclaim": "addclaim",
}
CANCEL_WORDS = frozenset({"cancel", "batal", "stop"})
CONFIRM_WORDS = frozenset({"ya", "yes", "oke", "ok", "benar"})
CLAIM_TYPES = ("replace", "reset")

BUYERS_COLLECTION = "buyers.json"
CLAIM_LOG_COLLECTION = "log_claim.json"
CLAIM_COLLECTIONS = {"replace": "claimsReplace.json", "reset": "claimsReset.json"}

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

BUYER_START = (
    "🛒 *TAMBAH BUYER BARU*\n\n"
    "Mari kita input data buyer step by step ya!\n\n"
    "📝 *Step 1/7: Nama User*\n"
    "Siapa nama buyer yang mau ditambahkan?\n\n"
    "Contoh: John Doe\n"
    "Ketik: nama lengkap buyer"
)
CLAIM_START = (
    "🛡️ *TAMBAH CLAIM GARANSI*\n\n"
    "Mari kita input data claim step by step!\n\n"
    "📝 *Step 1/4: Nama User*\n"
    "Siapa nama user yang mengalami masalah?\n\n"
    "Contoh: Jane Smith\n"
    "Ketik: nama user"
)
ALREADY_ACTIVE = (
    "⚠️ Masih ada perintah '{command}' yang berjalan. Lanjutkan step-nya atau "
    "ketik 'cancel' untuk membatalkan."
)
CONFIRM_PROMPT = "Konfirmasi data sudah benar?\nKetik: *ya* untuk simpan, *tidak* untuk batal"


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL.match(value))


def is_valid_date(value: str) -> bool:
    """Strict ``YYYY-MM-DD`` that names a real calendar day."""
    if not _DATE.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def parse_duration(value: str) -> int | None:
    try:
        days = int(value)
    except ValueError:
        return None
    return days if 1 <= days <= 365 else None


class GuidedCommands:
    """Drives the add-buyer and add-claim flows over a ``SessionManager``."""

    def __init__(
        self,
        sessions: SessionManager,
        store: JsonStore,
        valid_products: tuple[str, ...] = VALID_PRODUCTS,
        today: Callable[[], date] = date.today,
    ):
        self.sessions = sessions
        self.store = store
        self.valid_products = valid_products
        self.today = today

    def has_session(self, key: SessionKey) -> bool:
        return self.sessions.get(key) is not None

    def handle(self, key: SessionKey, text: str, sender: str = "", can_start: bool = False):
        """Reply for an active session or a start command, else None."""
        text = text.strip()
        session = self.sessions.get(key)
        command = START_COMMANDS.get(text.lower())

        if session is None:
            if command is None or not can_start:
                return None
            if self.sessions.start(key, command) is None:
                return None
            return BUYER_START if command == "addbuyer" else CLAIM_START

        if text.lower() in CANCEL_WORDS:
            self.sessions.end(key)
            logger.info("guided_cancelled", command=session.command)
            return texts.CANCELLED

        if command is not None:
            return ALREADY_ACTIVE.format(command=session.command)

        if session.command == "addbuyer":
            return self._buyer_step(key, session, text)
        return self._claim_step(key, session, text, sender)

    # --- add buyer ---

    def _buyer_step(self, key: SessionKey, session: Session, value: str) -> str:
        data = session.data
        products = ", ".join(self.valid_products)

        if session.step == 1:
            if len(value) < 2:
                return "❌ Nama terlalu pendek. Masukkan nama lengkap buyer:"
            data["user"] = value
            session.step = 2
            return (
                f"✅ Nama: {value}\n\n📝 *Step 2/7: Produk APK*\nProduk apa yang dibeli?\n\n"
                f"🎯 *Produk tersedia:*\n{products}\n\nKetik: nama produk"
            )

        if session.step == 2:
            product = value.lower()
            if product not in self.valid_products:
                return (
                    f"❌ Produk tidak valid!\n\nProduk tersedia:\n{products}\n\n"
                    "Ketik ulang nama produk:"
                )
            data["apk"] = product
            session.step = 3
            return (
                f"✅ Produk: {product}\n\n📝 *Step 3/7: Email*\n"
                "Email akun yang diberikan ke buyer?\n\nContoh: john@gmail.com\nKetik: email akun"
            )

        if session.step == 3:
            if not is_valid_email(value):
                return "❌ Format email tidak valid!\n\nContoh: user@gmail.com\nKetik ulang email:"
            data["email"] = value
            session.step = 4
            return (
                f"✅ Email: {value}\n\n📝 *Step 4/7: Durasi*\n"
                "Berapa hari durasi yang dibeli?\n\nContoh: 30, 60, 90\nKetik: angka durasi (hari)"
            )

        if session.step == 4:
            days = parse_duration(value)
            if days is None:
                return "❌ Durasi tidak valid!\n\nMasukkan angka 1-365 hari\nContoh: 30\nKetik ulang:"
            data["durasi"] = days
            session.step = 5
            return (
                f"✅ Durasi: {days} hari\n\n📝 *Step 5/7: Tanggal Diberikan*\n"
                "Kapan akun diberikan ke buyer?\n\nFormat: YYYY-MM-DD\nKetik: tanggal pemberian"
            )

        if session.step == 5:
            if not is_valid_date(value):
                return "❌ Format tanggal tidak valid!\n\nFormat: YYYY-MM-DD\nKetik ulang:"
            data["dateGiven"] = value
            session.step = 6
            return (
                f"✅ Tanggal diberikan: {value}\n\n📝 *Step 6/7: Tanggal Expired*\n"
                "Kapan akun akan expired?\n\nFormat: YYYY-MM-DD\nKetik: tanggal expired"
            )

        if session.step == 6:
            if not is_valid_date(value):
                return "❌ Format tanggal tidak valid!\n\nFormat: YYYY-MM-DD\nKetik ulang:"
            data["exp"] = value
            session.step = 7
            return (
                f"✅ Tanggal expired: {value}\n\n📝 *Step 7/7: Invite Code*\n"
                "Kode invite atau referensi (opsional)\n\n"
                "Ketik: kode invite (atau 'skip' jika tidak ada)"
            )

        if session.step == 7:
            data["invite"] = "-" if value.lower() == "skip" else value
            session.step = 8
            return f"📋 *KONFIRMASI DATA BUYER*\n\n{self._buyer_summary(data)}\n\n{CONFIRM_PROMPT}"

        self.sessions.end(key)
        if value.lower() not in CONFIRM_WORDS:
            return "❌ Data buyer dibatalkan. Ketik 'add buyer' untuk mulai lagi."
        if not self.save_buyer(data):
            return "❌ Gagal menyimpan data buyer.\n\nSilakan coba lagi dengan ketik 'add buyer'"
        return (
            f"✅ *BUYER BERHASIL DITAMBAHKAN!*\n\n{self._buyer_summary(data)}\n\n"
            "Data sudah tersimpan di database! 🎉"
        )

    @staticmethod
    def _buyer_summary(data: dict) -> str:
        return (
            f"👤 *User:* {data['user']}\n"
            f"📱 *Produk:* {data['apk']}\n"
            f"📧 *Email:* {data['email']}\n"
            f"⏰ *Durasi:* {data['durasi']} hari\n"
            f"📅 *Diberikan:* {data['dateGiven']}\n"
            f"⚠️ *Expired:* {data['exp']}\n"
            f"🎫 *Invite:* {data['invite']}"
        )

    def save_buyer(self, data: dict) -> bool:
        """Append a transaction, merging into the buyer's record and statistics."""
        buyers = self.store.load_collection(BUYERS_COLLECTION)
        duration = f"{data['durasi']} hari"
        transaction = {
            "apk": data["apk"],
            "email": data["email"],
            "durasi": duration,
            "dateGiven": data["dateGiven"],
            "exp": data["exp"],
            "invite": data["invite"],
        }

        buyer = next((b for b in buyers if isinstance(b, dict) and b.get("user") == data["user"]), None)
        if buyer is None:
            buyer = {"user": data["user"], "statistik": {}, "data": []}
            buyers.append(buyer)

        buyer.setdefault("data", []).append(transaction)
        stats = buyer.setdefault("statistik", {}).setdefault(data["apk"], {"total": 0, "rincian": {}})
        stats["total"] = stats.get("total", 0) + 1
        rincian = stats.setdefault("rincian", {})
        rincian[duration] = rincian.get(duration, 0) + 1

        saved = self.store.save_collection(BUYERS_COLLECTION, buyers)
        logger.info("buyer_saved", product=data["apk"], saved=saved)
        return saved

    # --- add claim ---

    def _claim_step(self, key: SessionKey, session: Session, value: str, sender: str) -> str:
        data = session.data

        if session.step == 1:
            if len(value) < 2:
                return "❌ Nama terlalu pendek. Masukkan nama user yang bermasalah:"
            data["user"] = value
            session.step = 2
            return (
                f"✅ User: {value}\n\n📝 *Step 2/4: Produk*\nProduk apa yang bermasalah?\n\n"
                "Contoh: netflix, disney, youtube\nKetik: nama produk"
            )

        if session.step == 2:
            data["apk"] = value.lower()
            session.step = 3
            return (
                f"✅ Produk: {data['apk']}\n\n📝 *Step 3/4: Deskripsi Masalah*\n"
                "Jelaskan masalah yang dialami user\n\nKetik: deskripsi masalah"
            )

        if session.step == 3:
            data["masalah"] = value
            session.step = 4
            return (
                f"✅ Masalah: {value}\n\n📝 *Step 4/4: Jenis Claim*\nPilih jenis penanganan:\n\n"
                "🔄 *replace* - Ganti akun baru\n🔧 *reset* - Reset/perbaiki akun existing\n\n"
                "Ketik: replace atau reset"
            )

        if session.step == 4:
            claim_type = value.lower()
            if claim_type not in CLAIM_TYPES:
                return "❌ Jenis claim tidak valid!\n\nPilih: replace atau reset"
            data["type"] = claim_type
            session.step = 5
            return (
                f"📋 *KONFIRMASI CLAIM GARANSI*\n\n{self._claim_summary(data)}\n"
                f"📅 *Tanggal:* {self.today().isoformat()}\n\n{CONFIRM_PROMPT}"
            )

        self.sessions.end(key)
        if value.lower() not in CONFIRM_WORDS:
            return "❌ Data claim dibatalkan. Ketik 'add claim' untuk mulai lagi."
        if not self.save_claim(data, sender):
            return "❌ Gagal menyimpan claim.\n\nSilakan coba lagi dengan ketik 'add claim'"
        return (
            f"✅ *CLAIM {data['type'].upper()} BERHASIL DITAMBAHKAN!*\n\n"
            f"{self._claim_summary(data)}\n\nClaim sudah tercatat dan akan diproses! 🎉"
        )

    @staticmethod
    def _claim_summary(data: dict) -> str:
        return (
            f"👤 *User:* {data['user']}\n"
            f"📱 *Produk:* {data['apk']}\n"
            f"❗ *Masalah:* {data['masalah']}\n"
            f"🔄 *Jenis:* {data['type'].upper()}"
        )

    def save_claim(self, data: dict, sender: str = "") -> bool:
        """Append the claim to its per-type collection and the claim log."""
        claim = {
            "user": data["user"],
            "apk": data["apk"],
            "masalah": data["masalah"],
            "tanggal": self.today().isoformat(),
        }
        if data["type"] == "replace":
            claim["status"] = "PENDING"
        else:
            claim["done"] = False

        collection = CLAIM_COLLECTIONS[data["type"]]
        claims = self.store.load_collection(collection)
        claims.append(claim)
        if not self.store.save_collection(collection, claims):
            return False

        log = self.store.load_collection(CLAIM_LOG_COLLECTION)
        log.append({
            **claim,
            "id": int(time.time() * 1000),
            "admin": sender.split("@")[0],
            "type": data["type"],
        })
        saved = self.store.save_collection(CLAIM_LOG_COLLECTION, log)
        logger.info("claim_saved", claim_type=data["type"], saved=saved)
        return saved
