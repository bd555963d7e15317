"""Shared CLI utilities."""

import sys
from pathlib import Path

import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()

FAQ_COLLECTION = "faq.json"
SOP_COLLECTION = "sop.json"
PROMO_COLLECTION = "promo.json"


def get_components(
    config_path: Path | None = None, config_model=None, with_llm: bool = True, reader=None
):
    """Build the whole message-handling graph from config.

    Args:
        config_path: Explicit config file (default: find_config())
        config_model: Pre-loaded BotConfig, skips file loading
        with_llm: If False, never build the generative responder
        reader: Optional natural-reading responder, ``str -> str | None``,
                served by the cascade right after the mood stage
    """
    from cascade import GuidedCommands, LearningCommands, MessageRouter, ResponseCache
    from cascade import SessionManager, build_cascade
    from catalog import CatalogResolver, CatalogStore
    from cli.config import load_config_model
    from curated import CuratedKind, CuratedResolver, normalize_entries
    from knowledge import KnowledgeBase, ReviewQueue, TeachingParser
    from observability import Metrics
    from safety import SafetyGuard
    from storage import JsonStore
    from variants import VariantChooser

    if config_model is None:
        try:
            config_model = load_config_model(config_path)
        except ValueError as e:
            console.print(f"[red]Config error:[/] {e}")
            sys.exit(1)

    paths = config_model.paths
    matching = config_model.matching
    learning = config_model.learning

    store = JsonStore(paths.data_dir)
    chooser = VariantChooser(seed=config_model.variant_seed)
    metrics = Metrics()

    catalog_store = CatalogStore(paths.products_dir, chooser)
    catalog = CatalogResolver(
        catalog_store,
        fuzzy_threshold=matching.product_threshold,
        weak_threshold=matching.weak_threshold,
        word_overlap_min=matching.word_overlap_min,
        char_similarity_min=matching.char_similarity_min,
        confusable_pairs=matching.confusable_pairs,
    )
    faq = CuratedResolver(
        normalize_entries(store.load_collection(FAQ_COLLECTION), CuratedKind.FAQ),
        threshold=matching.faq_threshold,
        noise_floor=matching.faq_noise_floor,
    )
    sop = CuratedResolver(
        normalize_entries(store.load_collection(SOP_COLLECTION), CuratedKind.SOP),
        threshold=matching.faq_threshold,
        noise_floor=matching.faq_noise_floor,
    )
    cascade = build_cascade(
        catalog,
        faq,
        sop,
        load_promos=lambda: store.load_collection(PROMO_COLLECTION),
        chooser=chooser,
        reader=reader,
        metrics=metrics,
    )

    kb = KnowledgeBase(store, similarity_threshold=matching.learned_threshold)
    review = ReviewQueue(
        kb,
        store,
        max_cases=learning.max_unknown_cases,
        auto_learn_min=learning.auto_learn_min,
    )
    guard = SafetyGuard()
    sessions = SessionManager(timeout=config_model.session.timeout_seconds)

    router = MessageRouter(
        cascade,
        kb,
        review,
        guard,
        parser=TeachingParser(),
        commands=LearningCommands(kb, review),
        guided=GuidedCommands(sessions, store),
        generative=_build_generative(config_model) if with_llm else None,
        owner_ids=config_model.owner.owner_ids,
        moderator_ids=config_model.owner.moderator_ids,
        metrics=metrics,
        cache=ResponseCache(
            ttl=config_model.session.cache_ttl_seconds,
            max_entries=config_model.session.cache_max_entries,
        ),
        derive_learning=learning.derive_from_resolvers,
        derived_confidence=learning.derived_confidence,
        learned_accept=matching.learned_accept,
    )

    return {
        "config_model": config_model,
        "store": store,
        "catalog": catalog,
        "cascade": cascade,
        "kb": kb,
        "review": review,
        "guard": guard,
        "sessions": sessions,
        "metrics": metrics,
        "router": router,
    }


def _build_generative(config_model):
    """GenerativeResponder when enabled and a provider can be built, else None."""
    from llm import GenerativeResponder, LLMError, create_llm_provider

    llm_cfg = config_model.llm
    if not llm_cfg.enabled:
        return None
    try:
        provider = create_llm_provider(
            provider=llm_cfg.provider,
            api_key=llm_cfg.api_key,
            model=llm_cfg.model,
        )
    except LLMError as e:
        logger.warning("generative_disabled", error=str(e))
        return None
    return GenerativeResponder(provider, max_tokens=llm_cfg.max_tokens)
