import time
from typing import Any

import dspy
from sqlalchemy.exc import SQLAlchemyError

from recipe_planner.config import settings
from recipe_planner.logging import get_logger
from recipe_planner.storage.db import get_session
from recipe_planner.storage.repositories import log_llm_call
from recipe_planner.utils.timing import format_duration

logger = get_logger(__name__)


def _make_lm() -> dspy.LM:
    return dspy.LM(
        model=f"{settings.llm_provider}/{settings.llm_model}",
        api_key=settings.llm_api_key or None,
        api_base=settings.llm_api_base or None,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout=settings.llm_timeout_s,
        cache=False,
        num_retries=0,
    )


def configure_dspy() -> None:
    """Install the default LM. Call once from the main thread at startup."""
    dspy.settings.configure(lm=_make_lm())
    logger.info(
        "llm.configure provider=%s model=%s api_base=%s",
        settings.llm_provider,
        settings.llm_model,
        settings.llm_api_base,
    )


def run_with_logging(
    prompt_name: str,
    prompt_version: str,
    fn: Any,
    **kwargs: Any,
) -> Any:
    """Call ``fn(**kwargs)``, then record the call in LLMCallLog.

    Errors from ``fn`` propagate. A failed log write is reported but never drops the result.
    """
    start = time.time()
    logger.info(
        "[TIMING] llm.call.start name=%s version=%s model=%s",
        prompt_name,
        prompt_version,
        settings.llm_model,
    )
    result = fn(**kwargs)
    latency_ms = int((time.time() - start) * 1000)
    try:
        with get_session() as session:
            log_llm_call(
                session=session,
                prompt_name=prompt_name,
                prompt_version=prompt_version,
                model=settings.llm_model,
                input_payload=str(kwargs),
                output_payload=str(result),
                latency_ms=latency_ms,
            )
    except SQLAlchemyError as exc:
        logger.warning("llm.call.log_failed name=%s error=%s", prompt_name, exc)
    logger.info(
        "[TIMING] llm.call.end name=%s latency_ms=%s (%s)",
        prompt_name,
        latency_ms,
        format_duration(latency_ms),
    )
    return result
