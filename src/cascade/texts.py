"""Fixed customer-facing reply templates."""

WELCOME = (
    "Halo! Selamat datang di Vylozzone 😊\n\n"
    "Ada yang bisa saya bantu terkait produk digital kami? Ketik 'menu' untuk "
    "melihat daftar produk atau langsung tanya aja ya!"
)
THANKS = "Sama-sama, Kak! 😊 Senang bisa membantu. Ada yang lain yang bisa saya bantu?"
CLARIFY = (
    "Bisa dijelaskan lebih jelas, Kak? Saya siap membantu dengan pertanyaan "
    "seputar produk Vylozzone 😊"
)
NOT_UNDERSTOOD = (
    "Maaf, saya kurang paham maksudnya. Bisa dijelaskan lebih detail apa yang "
    "Kak butuhkan? 😊"
)
INVALID_INPUT = "Mohon kirim pesan yang valid ya, Kak 😊"
SYSTEM_ERROR = (
    "Maaf, terjadi kesalahan sistem. Silakan coba lagi atau hubungi admin untuk bantuan."
)
ANGRY = (
    "Maaf atas kendala yang terjadi, Kak. Mohon kirim nomor order & screenshot "
    "error, tim kami bantu follow-up sesuai SOP."
)
OFF_TOPIC = (
    "Maaf Kak, CS ini hanya menangani order, kendala, atau info garansi Vylozzone ya 🙏."
)
DISCOUNT = (
    "Untuk info promo dan diskon terbaru, Kak bisa langsung chat admin ya! "
    "Admin akan kasih penawaran terbaik sesuai budget Kak 😊"
)
GENERAL_PRICING = (
    "Harga produk Vylozzone bervariasi, Kak:\n\n"
    "📺 Streaming: 5k - 150k/bulan\n"
    "🎨 Aplikasi: 15k - 50k/bulan\n\n"
    "Untuk harga detail, sebutkan produk spesifik yang diminati ya! "
    "Contoh: 'netflix harga' atau 'youtube berapa?' 😊"
)
CATALOG_HEADER = "🛍️ *PRODUK VYLOZZONE*\n\n"
CATALOG_FOOTER = "\n\nMau info detail produk mana, Kak? Tinggal ketik nama produknya aja ya! 😊"

# Products customers ask for that the shop does not sell.
UNAVAILABLE_PRODUCTS = {
    "spotify": (
        "Maaf Kak, untuk saat ini Spotify belum tersedia di Vylozzone. Produk music "
        "streaming yang ada: YouTube Premium (include YouTube Music). Mau info YouTube Premium?"
    ),
    "canva": (
        "Maaf Kak, untuk saat ini Canva belum tersedia. Alternatif design apps yang ada: "
        "CapCut Pro untuk video editing. Mau info CapCut Pro?"
    ),
}

# --- owner-facing ---

OWNER_ONLY = "❗ Perintah ini hanya bisa digunakan oleh Owner!"
TEACH_SUCCESS = (
    "✅ Berhasil dipelajari dengan aman!\n\n"
    'Input: "{trigger}"\n'
    'Response: "{response}"\n'
    "Safety Score: {score:.1f}%\n\n"
    "Bot akan mengingat ini untuk kedepannya."
)
TEACH_BLOCKED_HEADER = "🛡️ Pembelajaran ditolak untuk keamanan bisnis.\n\nAlasan: {reason}\n\n"
TEACH_BLOCKED_FOOTER = (
    "\nBot hanya menerima pembelajaran yang aman dan sesuai business rules Vylozzone."
)
TEACH_FORMAT_HELP = (
    "❌ Format teaching tidak valid.\n\n"
    "Contoh yang aman:\n"
    '• "ajari bot: halo -> Halo! Ada yang bisa saya bantu?"\n'
    '• "ingat ini: cara bayar -> Pembayaran bisa via QRIS, Dana, OVO"\n'
    '• "kalo ada yang nanya garansi, bilang sesuai ketentuan produk masing-masing"\n\n'
    "⚠️ Hindari:\n"
    "• Info garansi/harga yang salah\n"
    "• Menyebut kompetitor\n"
    "• Bahasa tidak profesional"
)
TEACH_ERROR = "❌ Terjadi kesalahan saat validasi pembelajaran. Mohon coba lagi."
SUGGESTION_RECEIVED = (
    "Terima kasih, Kak! Masukan ini sudah kami catat dan akan direview admin dulu ya 🙏"
)
LEARNING_HELP = (
    "🎓 *CARA MENGAJARI BOT*\n\n"
    "📝 *Format Teaching (Natural):*\n"
    '• "jangan nanya balik saat ada yang tanya cara bayar, bilang pembayaran via QRIS, Dana, OVO"\n'
    '• "kalo ada yang nanya error, katakan kirim screenshot dan nomor order"\n'
    '• "saat ditanya harga netflix, bilang mulai dari 20rb per bulan"\n\n'
    "📊 *Commands:*\n"
    "• learning stats - Statistik pembelajaran\n"
    "• review queue - Lihat antrian pembelajaran\n"
    "• unknown cases - Lihat kasus tidak dikenal\n"
    "• auto learn - Proses otomatis confidence tinggi\n"
    "• approve [id] - Setujui pembelajaran\n"
    "• reject [id] - Tolak pembelajaran\n"
    "• reset learning - Hapus semua pembelajaran"
)
CANCELLED = "❌ Perintah dibatalkan. Ketik 'admin menu' untuk melihat menu admin."

# --- fallback ---

GENERATIVE_BLOCKED = (
    "Maaf, saya tidak dapat memberikan jawaban yang sesuai untuk pertanyaan ini. Tim kami "
    "akan review dan meningkatkan response. Mohon hubungi admin untuk bantuan langsung."
)
