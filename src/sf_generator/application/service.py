# src/sf_generator/application/service.py
"""Wire an IdGenerator from Settings and expose the process-default instance."""
import logging
import threading

from config.settings import Settings, settings
from src.sf_generator.application.schemas import SnowflakeIdSchema
from src.sf_generator.domain.codec import decode_id
from src.sf_generator.domain.layout import DEFAULT_LAYOUT, BitLayout
from src.sf_generator.engine.generator import IdGenerator
from src.sf_generator.engine.wait import SleepWait, SpinWait, TickWaiterProtocol

logger = logging.getLogger(__name__)

_generator: IdGenerator | None = None
_generator_lock = threading.Lock()


def build_layout(cfg: Settings) -> BitLayout:
    return BitLayout(
        epoch_ms=cfg.EPOCH_MS,
        datacenter_bits=cfg.DATACENTER_BITS,
        worker_bits=cfg.WORKER_BITS,
        sequence_bits=cfg.SEQUENCE_BITS,
        signed=cfg.SIGNED_IDS,
    )


def build_waiter(cfg: Settings) -> TickWaiterProtocol:
    if cfg.WAIT_STRATEGY == "sleep":
        return SleepWait(interval_s=cfg.WAIT_SLEEP_SECONDS, max_wait_ms=cfg.MAX_WAIT_MS)
    return SpinWait(max_wait_ms=cfg.MAX_WAIT_MS)


def create_generator(cfg: Settings = settings) -> IdGenerator:
    """Build a generator from config.

    Raises InvalidLayoutError / InvalidIdentityError on bad config; callers
    should treat both as fatal at startup.
    """
    logger.info(
        "Creating generator for %s (wait_strategy=%s, max_wait_ms=%s)",
        cfg.APP_NAME,
        cfg.WAIT_STRATEGY,
        cfg.MAX_WAIT_MS,
    )
    return IdGenerator(
        worker_id=cfg.WORKER_ID,
        datacenter_id=cfg.DATACENTER_ID,
        layout=build_layout(cfg),
        waiter=build_waiter(cfg),
    )


def get_generator() -> IdGenerator:
    global _generator  # noqa: PLW0603
    if _generator is None:
        with _generator_lock:
            if _generator is None:
                _generator = create_generator()
    return _generator


def reset_generator() -> None:
    """Drop the process-default generator (tests, config reload)."""
    global _generator  # noqa: PLW0603
    with _generator_lock:
        _generator = None


def generate_id() -> int:
    """Generate a unique snowflake id using the process-default generator."""
    return get_generator().generate_id()


def describe_id(snowflake_id: int, layout: BitLayout = DEFAULT_LAYOUT) -> SnowflakeIdSchema:
    parts = decode_id(layout, snowflake_id)
    return SnowflakeIdSchema(
        id=str(snowflake_id),
        timestamp_ms=parts.timestamp_ms,
        created_at=parts.created_at,
        datacenter_id=parts.datacenter_id,
        worker_id=parts.worker_id,
        sequence=parts.sequence,
    )
