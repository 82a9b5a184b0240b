"""
services/storage.py
────────────────────────────────────────────────────────────────────────
* `KeyValueStore` port (async get / set / delete of string blobs)
* `MemoryKeyValueStore` – dict-backed, used by tests and scripts
* `StorageService` – the four app records on top of any store

Every read/write swallows store errors after logging them: a failed
read is "no data", a failed write is simply lost.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Protocol

from pydantic import TypeAdapter, ValidationError

from core.models import Meal, PersonalInfo

_LOG = logging.getLogger(__name__)

PERSONAL_INFO_KEY = "personal_info"
MEALS_KEY = "meals_data"
GEMINI_API_KEY = "gemini_api_key"
FIRST_TIME_USER_KEY = "first_time_user"

_MEALS_ADAPTER = TypeAdapter(List[Meal])


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class MemoryKeyValueStore:
    def __init__(self, data: Dict[str, str] | None = None) -> None:
        self.data: Dict[str, str] = dict(data or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


class StorageService:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    # ───────── personal info ────────────────────────────────────────
    async def save_personal_info(self, info: PersonalInfo) -> None:
        try:
            await self._store.set(PERSONAL_INFO_KEY, info.model_dump_json())
        except Exception as e:
            _LOG.error("Error saving personal info: %s", e)

    async def get_personal_info(self) -> PersonalInfo | None:
        try:
            data = await self._store.get(PERSONAL_INFO_KEY)
            return PersonalInfo.model_validate_json(data) if data else None
        except ValidationError as e:
            _LOG.error("Stored personal info is unreadable: %s", e)
            return None
        except Exception as e:
            _LOG.error("Error getting personal info: %s", e)
            return None

    async def clear_personal_info(self) -> None:
        try:
            await self._store.delete(PERSONAL_INFO_KEY)
        except Exception as e:
            _LOG.error("Error clearing personal info: %s", e)

    # ───────── meals ────────────────────────────────────────────────
    async def save_meals(self, meals: List[Meal]) -> None:
        try:
            await self._store.set(MEALS_KEY, _MEALS_ADAPTER.dump_json(meals).decode())
        except Exception as e:
            _LOG.error("Error saving meals: %s", e)

    async def get_meals(self) -> List[Meal] | None:
        try:
            data = await self._store.get(MEALS_KEY)
            return _MEALS_ADAPTER.validate_json(data) if data else None
        except ValidationError as e:
            _LOG.error("Stored meals are unreadable: %s", e)
            return None
        except Exception as e:
            _LOG.error("Error getting meals: %s", e)
            return None

    async def clear_meals(self) -> None:
        try:
            await self._store.delete(MEALS_KEY)
        except Exception as e:
            _LOG.error("Error clearing meals: %s", e)

    # ───────── Gemini API key ───────────────────────────────────────
    async def save_gemini_api_key(self, api_key: str) -> None:
        try:
            await self._store.set(GEMINI_API_KEY, api_key)
        except Exception as e:
            _LOG.error("Error saving Gemini API key: %s", e)

    async def get_gemini_api_key(self) -> str | None:
        try:
            return await self._store.get(GEMINI_API_KEY)
        except Exception as e:
            _LOG.error("Error getting Gemini API key: %s", e)
            return None

    async def clear_gemini_api_key(self) -> None:
        try:
            await self._store.delete(GEMINI_API_KEY)
        except Exception as e:
            _LOG.error("Error clearing Gemini API key: %s", e)

    # ───────── first-run flag ───────────────────────────────────────
    async def set_first_time_user(self, is_first_time: bool) -> None:
        try:
            await self._store.set(FIRST_TIME_USER_KEY, json.dumps(is_first_time))
        except Exception as e:
            _LOG.error("Error setting first time user flag: %s", e)

    async def is_first_time_user(self) -> bool:
        try:
            data = await self._store.get(FIRST_TIME_USER_KEY)
            return bool(json.loads(data)) if data else True
        except Exception as e:
            _LOG.error("Error getting first time user flag: %s", e)
            return True

    # ───────── whole-store helpers ──────────────────────────────────
    async def clear_all_data(self) -> None:
        await asyncio.gather(
            self.clear_personal_info(),
            self.clear_meals(),
            self.clear_gemini_api_key(),
            self._delete_quietly(FIRST_TIME_USER_KEY),
        )

    async def _delete_quietly(self, key: str) -> None:
        try:
            await self._store.delete(key)
        except Exception as e:
            _LOG.error("Error clearing %s: %s", key, e)

    async def export_data(self) -> Dict[str, Any]:
        """Backup payload; the API key itself is never exported."""
        info, meals, api_key = await asyncio.gather(
            self.get_personal_info(),
            self.get_meals(),
            self.get_gemini_api_key(),
        )
        return {"personal_info": info, "meals": meals, "has_api_key": bool(api_key)}

    async def import_data(
        self,
        personal_info: PersonalInfo | None = None,
        meals: List[Meal] | None = None,
        api_key: str | None = None,
    ) -> None:
        jobs = []
        if personal_info is not None:
            jobs.append(self.save_personal_info(personal_info))
        if meals:
            jobs.append(self.save_meals(meals))
        if api_key:
            jobs.append(self.save_gemini_api_key(api_key))
        await asyncio.gather(*jobs)

    async def has_completed_setup(self) -> bool:
        return await self.get_personal_info() is not None

    async def get_storage_stats(self) -> Dict[str, bool]:
        info, meals, api_key, first = await asyncio.gather(
            self.get_personal_info(),
            self.get_meals(),
            self.get_gemini_api_key(),
            self.is_first_time_user(),
        )
        return {
            "has_personal_info": info is not None,
            "has_meals": meals is not None,
            "has_api_key": bool(api_key),
            "is_first_time": first,
        }
