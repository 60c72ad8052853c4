"""Helpers for loading and caching named effects from external sources."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from pydantic import ValidationError

from core.logging_config import get_logger

from .effects import Effect, parse_effect
from .errors import EffectNotFoundError, EffectValidationError
from .schema import EffectSpecCollection, NamedEffectSpec

logger = get_logger("rules.loader")


class EffectRepository:
    """In-memory registry of named :class:`Effect` objects with simple caching."""

    def __init__(self) -> None:
        self._effects: Dict[str, Effect] = {}
        self._json_cache: Dict[Path, int] = {}

    # ------------------------------------------------------------------ loading
    def load_from_json(self, path: Path, *, force: bool = False) -> None:
        """Load effects from a JSON file on disk.

        The file is skipped when it has not been modified since the last load,
        unless ``force`` is set.
        """

        path = Path(path)
        current_timestamp = path.stat().st_mtime_ns
        if not force and path in self._json_cache and self._json_cache[path] >= current_timestamp:
            logger.debug("Effects from %s already loaded", path)
            return
        payload = json.loads(path.read_text())
        count = self._store_collection(payload)
        self._json_cache[path] = current_timestamp
        logger.debug("Loaded %d effect(s) from %s", count, path)

    def load_from_records(self, records: Iterable[Mapping[str, Any]]) -> None:
        """Load effects from database-like rows.

        A row either holds a structured ``payload`` mapping or the text form of
        the effect under ``text``.
        """

        for record in records:
            payload = dict(record)
            if "text" in payload:
                effect_id = payload.get("effect_id")
                if not effect_id:
                    raise EffectValidationError("Effect record requires an 'effect_id'")
                self.register(effect_id, parse_effect(payload["text"]))
                continue
            data = payload.pop("payload", payload)
            if not isinstance(data, Mapping):
                raise EffectValidationError("Database record payload must be a mapping")
            try:
                spec = NamedEffectSpec.model_validate(data)
            except ValidationError as exc:
                raise EffectValidationError(str(exc)) from exc
            self.register(spec.effect_id, spec.to_effect())

    def register(self, effect_id: str, effect: Effect) -> None:
        self._effects[effect_id] = effect

    # ------------------------------------------------------------------- access
    def get(self, effect_id: str) -> Effect:
        try:
            return self._effects[effect_id]
        except KeyError as exc:
            raise EffectNotFoundError(effect_id) from exc

    def ids(self) -> List[str]:
        return sorted(self._effects)

    def __len__(self) -> int:
        return len(self._effects)

    def __contains__(self, effect_id: object) -> bool:
        return effect_id in self._effects

    def _store_collection(self, payload: Any) -> int:
        if isinstance(payload, Mapping) and "effects" in payload:
            payload = payload["effects"]
        try:
            collection = EffectSpecCollection.model_validate(payload)
        except ValidationError as exc:
            raise EffectValidationError(str(exc)) from exc
        for spec in collection.root:
            self._effects[spec.effect_id] = spec.to_effect()
        return len(collection.root)


__all__ = ["EffectRepository"]
