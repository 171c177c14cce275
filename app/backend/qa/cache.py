"""
Thread-safe in-memory answer cache.

Maps a trimmed question to the answer produced for it so repeated
questions skip the remote model and the local matcher. Entries live for
the process lifetime: there is no TTL, no size bound and no eviction.
"""
import threading
from typing import Dict, Optional


class AnswerCache:
    def __init__(self):
        self._store: Dict[str, str] = {}
        self._lock = threading.Lock()

    def _normalize_key(self, question: str) -> str:
        return question.strip()

    def lookup(self, question: str) -> Optional[str]:
        key = self._normalize_key(question)
        with self._lock:
            return self._store.get(key)

    def store(self, question: str, answer: str):
        # last writer wins on concurrent misses for the same key
        key = self._normalize_key(question)
        with self._lock:
            self._store[key] = answer

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def stats(self) -> Dict:
        with self._lock:
            return {"size": len(self._store)}
