"""Ordered fold over response stages, stopping at the first match."""

from collections.abc import Callable

import structlog

from catalog import CatalogResolver
from curated import CuratedResolver
from observability import Metrics
from variants import VariantChooser

from . import texts
from .results import Matched, NoMatch, StageResult
from .stages import (
    CatalogStage,
    CuratedStage,
    GibberishStage,
    MoodStage,
    PromoStage,
    ReaderStage,
    ShortcutStage,
)

logger = structlog.get_logger()

Stage = Callable[[str], StageResult]


class ResponseCascade:
    """Runs stages in order; a stage that raises counts as no match."""

    def __init__(self, stages: list[Stage], metrics: Metrics | None = None):
        self.stages = list(stages)
        self.metrics = metrics

    def run(self, message) -> StageResult:
        if not isinstance(message, str) or not message.strip():
            return Matched(texts.INVALID_INPUT, "invalid_input")

        text = message.strip()
        for stage in self.stages:
            name = getattr(stage, "name", type(stage).__name__)
            try:
                result = stage(text)
            except Exception as e:
                logger.warning("cascade_stage_failed", stage=name, error=str(e))
                if self.metrics:
                    self.metrics.counter(f"stage.{name}.error")
                continue

            if isinstance(result, Matched):
                if self.metrics:
                    self.metrics.counter(f"stage.{name}")
                logger.debug("cascade_matched", stage=name)
                return result

        return NoMatch(stage="deferred")

    def stage_names(self) -> list[str]:
        return [getattr(s, "name", type(s).__name__) for s in self.stages]


def build_cascade(
    catalog: CatalogResolver,
    faq: CuratedResolver,
    sop: CuratedResolver,
    load_promos: Callable[[], list],
    chooser: VariantChooser,
    reader: Callable[[str], str | None] | None = None,
    metrics: Metrics | None = None,
) -> ResponseCascade:
    """Default stage order: shortcuts, mood, reader, FAQ, SOP, promo, catalog, clarify."""
    return ResponseCascade(
        [
            ShortcutStage(catalog.store.names),
            MoodStage(),
            ReaderStage(reader),
            CuratedStage("faq", faq, chooser),
            CuratedStage("sop", sop, chooser),
            PromoStage(load_promos),
            CatalogStage(catalog),
            GibberishStage(),
        ],
        metrics=metrics,
    )

