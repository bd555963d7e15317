"""Owner commands for inspecting and steering the learning system."""

import re

import structlog

from knowledge import KnowledgeBase, ReviewQueue

from . import texts

logger = structlog.get_logger()

STATS_COMMANDS = ("learning stats", "bot stats")
RESET_COMMANDS = ("reset learning", "clear memory")
HELP_COMMANDS = ("learning help", "teach help")
QUEUE_COMMANDS = ("review queue", "cek queue")
CASES_COMMANDS = ("unknown cases",)
AUTO_LEARN_COMMANDS = ("auto learn",)

_REVIEW_ID = re.compile(r"^(approve|reject)\s+(\d+)$")
_QUEUE_PREVIEW = 5


def _clip(text: str, limit: int = 100) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


class LearningCommands:
    def __init__(self, kb: KnowledgeBase, review: ReviewQueue):
        self.kb = kb
        self.review = review

    def is_command(self, message: str) -> bool:
        cmd = message.strip().lower()
        return (
            cmd in STATS_COMMANDS + RESET_COMMANDS + HELP_COMMANDS
            or cmd in QUEUE_COMMANDS + CASES_COMMANDS + AUTO_LEARN_COMMANDS
            or bool(_REVIEW_ID.match(cmd))
        )

    def handle(self, message: str) -> str | None:
        """Reply to a learning command, or None if the message is not one."""
        cmd = message.strip().lower()

        if cmd in STATS_COMMANDS:
            return self.stats_text()
        if cmd in RESET_COMMANDS:
            removed = self.kb.reset()
            logger.warning("learning_reset_by_owner", removed=removed)
            return "🧠 Learning data telah direset. Bot memulai dari awal."
        if cmd in HELP_COMMANDS:
            return texts.LEARNING_HELP
        if cmd in QUEUE_COMMANDS:
            return self.queue_text()
        if cmd in CASES_COMMANDS:
            return self.cases_text()
        if cmd in AUTO_LEARN_COMMANDS:
            learned = self.review.auto_learn()
            return (
                f"Auto-learning dijalankan untuk item dengan confidence > "
                f"{self.review.auto_learn_min}: {len(learned)} item dipelajari."
            )

        match = _REVIEW_ID.match(cmd)
        if match:
            action, entry_id = match.group(1), int(match.group(2))
            return self._review(action, entry_id)
        return None

    def _review(self, action: str, entry_id: int) -> str:
        entry = self.kb.get(entry_id)
        if entry is None:
            return f"❌ Item dengan ID {entry_id} tidak ditemukan."
        if entry.approved is True:
            return f"⚠️ Item ID {entry_id} sudah dipelajari sebelumnya."
        if entry.approved is False:
            return f"⚠️ Item ID {entry_id} sudah ditolak sebelumnya."

        if action == "approve":
            if self.review.approve(entry_id) is None:
                return f"❌ Item ID {entry_id} tidak sedang menunggu review."
            return (
                f"✅ Item ID {entry_id} berhasil dipelajari!\n\n"
                f'Input: "{entry.trigger}"\nResponse: "{entry.response}"'
            )

        if self.review.reject(entry_id) is None:
            return f"❌ Item ID {entry_id} tidak sedang menunggu review."
        return f"❌ Item ID {entry_id} ditolak dan tidak akan dipelajari."

    def stats_text(self) -> str:
        kb = self.kb.stats()
        review = self.review.stats()
        last = kb["last_learned"] or "None"
        return (
            "📊 *LEARNING STATISTICS*\n\n"
            f"🧠 *Knowledge Base:* {kb['total']} entries\n"
            f"🎯 *Patterns:* {kb['patterns']} patterns\n"
            f"🤔 *Unknown Cases:* {review['unknown_cases']}\n"
            f"📚 *Learned Cases:* {review['learned']}\n"
            f"⏳ *Learning Queue:* {review['queued']}\n"
            f"📈 *Learning Rate:* {review['learning_rate']}\n"
            f"📅 *Last Activity:* {last}"
        )

    def queue_text(self) -> str:
        pending = self.review.pending()
        if not pending:
            return "📋 Queue pembelajaran kosong. Semua response telah diproses."

        lines = [f"📋 *LEARNING QUEUE* ({len(pending)} pending)", ""]
        for n, entry in enumerate(pending[:_QUEUE_PREVIEW], 1):
            lines += [
                f"{n}. ID: {entry.id}",
                f'   📝 Input: "{entry.trigger}"',
                f'   💬 Response: "{_clip(entry.response)}"',
                f"   📊 Confidence: {entry.confidence * 100:.1f}%",
                f"   ⏰ {entry.created_at:%Y-%m-%d %H:%M}",
                "",
            ]
        if len(pending) > _QUEUE_PREVIEW:
            lines += [f"... dan {len(pending) - _QUEUE_PREVIEW} item lainnya", ""]
        lines += [
            "📝 Commands:",
            "• approve [id] - Setujui pembelajaran",
            "• reject [id] - Tolak pembelajaran",
            "• auto learn - Auto-learn confidence > 60%",
        ]
        return "\n".join(lines)

    def cases_text(self, limit: int = 10) -> str:
        cases = self.review.unknown_cases(limit)
        if not cases:
            return "📂 Belum ada unknown cases yang tercatat."

        lines = [f"📂 *UNKNOWN CASES* ({self.review.stats()['unknown_cases']} total)", ""]
        for n, case in enumerate(cases, 1):
            lines.append(f'{n}. "{_clip(case.get("message", ""), 80)}"')
            if case.get("response"):
                lines.append(f'   💬 "{_clip(case["response"], 80)}"')
        return "\n".join(lines)
