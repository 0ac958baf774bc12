from pixelpeek.config import AppConfig
from pixelpeek.game.engine import RoundStateMachine
from pixelpeek.hints.base import HintGenerator
from pixelpeek.hints.llm import LLMHintGenerator
from pixelpeek.hints.static import StaticHintGenerator
from pixelpeek.judges.base import SemanticJudge
from pixelpeek.judges.llm import LLMJudge
from pixelpeek.llm.factory import create_client
from pixelpeek.matching.engine import MatchEngine
from pixelpeek.sources.bank import RoundBank
from pixelpeek.sources.base import ImageSource
from pixelpeek.sources.unsplash import UnsplashSource
from pixelpeek.storage.json_store import JsonStorage


def create_judge(config: AppConfig) -> SemanticJudge | None:
    if config.judge.provider.lower() == "none":
        return None
    client = create_client(
        config.judge.provider,
        config.judge.model_id,
        timeout=config.judge.timeout_seconds
    )
    return LLMJudge(client)


def create_hint_generator(config: AppConfig) -> HintGenerator:
    provider = (config.hints.provider or config.judge.provider).lower()
    if provider in ("static", "mock", "none"):
        return StaticHintGenerator()
    client = create_client(
        provider,
        config.hints.model_id or config.judge.model_id,
        timeout=config.hints.timeout_seconds
    )
    return LLMHintGenerator(client)


def create_source(config: AppConfig) -> ImageSource:
    kind = config.source.kind.lower()
    if kind == "bank":
        return RoundBank.from_file(config.source.rounds_file)
    elif kind == "unsplash":
        return UnsplashSource(
            config.source.categories,
            timeout=config.source.timeout_seconds,
            max_retries=config.source.max_retries
        )
    else:
        raise ValueError(f"Unknown source kind: {config.source.kind}")


def create_matcher(config: AppConfig, judge: SemanticJudge | None = None) -> MatchEngine:
    return MatchEngine(
        judge=judge,
        thresholds=config.thresholds,
        judge_timeout=config.judge.timeout_seconds
    )


def create_machine(
    config: AppConfig,
    source: ImageSource | None = None,
    storage: JsonStorage | None = None,
    observers=None
) -> RoundStateMachine:
    return RoundStateMachine(
        matcher=create_matcher(config, create_judge(config)),
        hints=create_hint_generator(config),
        source=source or create_source(config),
        config=config.game,
        hint_settings=config.hints,
        storage=storage,
        observers=observers
    )
