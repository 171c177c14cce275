"""
Question answering flow: cache, then remote model, then local matcher.

The cache lock is only held inside a single lookup or store, never across
the remote call. Two concurrent misses for the same question may both
compute an answer; the later store overwrites the earlier one.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from qa.cache import AnswerCache
from qa.local_engine import LocalAnswerEngine
from qa.remote_client import RemoteAnswerClient, RemoteAnswerError

logger = logging.getLogger(__name__)

EMPTY_QUESTION_PROMPT = "Ask me about my skills, work, or projects."


@dataclass(frozen=True)
class AskResult:
    answer: str
    source: str  # "empty", "cache", "remote" or "local"


class QuestionOrchestrator:
    def __init__(
        self,
        cache: AnswerCache,
        local_engine: LocalAnswerEngine,
        remote: Optional[RemoteAnswerClient] = None,
    ):
        self.cache = cache
        self.local_engine = local_engine
        # None means no credential is configured; the remote path is skipped
        self.remote = remote

    async def handle(self, raw_question: str) -> str:
        return (await self.resolve(raw_question)).answer

    async def resolve(self, raw_question: str) -> AskResult:
        question = (raw_question or "").strip()
        if not question:
            return AskResult(EMPTY_QUESTION_PROMPT, "empty")

        cached = self.cache.lookup(question)
        if cached is not None:
            logger.info("[cache] %s -> %s", question, cached)
            return AskResult(cached, "cache")

        if self.remote is not None:
            try:
                answer = await self.remote.ask(question)
            except RemoteAnswerError as e:
                logger.warning("[remote error] %s: %s", type(e).__name__, e)
            else:
                if answer:
                    self.cache.store(question, answer)
                    logger.info("[remote] %s -> %s", question, answer)
                    return AskResult(answer, "remote")
                logger.warning("[remote error] empty answer for %r", question)

        answer = self.local_engine.answer(question)
        self.cache.store(question, answer)
        logger.info("[local] %s -> %s", question, answer)
        return AskResult(answer, "local")
