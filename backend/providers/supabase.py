# providers/supabase.py
# Supabase auth (GoTrue) + itineraries table (PostgREST) over httpx.
# Requests run as the caller: the caller's JWT goes in Authorization so
# row-level security applies.

import logging
import httpx
from typing import List
from errors import AuthenticationError, PersistenceError
from utils import snippet

log = logging.getLogger("cliptotrip.supabase")

TABLE = "itineraries"


class SupabaseClient:
    def __init__(self, http: httpx.AsyncClient, url: str, anon_key: str):
        self.http = http
        self.url = url.rstrip("/")
        self.anon_key = anon_key

    def _headers(self, token: str, **extra) -> dict:
        return {"apikey": self.anon_key, "Authorization": f"Bearer {token}", **extra}

    async def get_user(self, token: str) -> dict:
        r = await self.http.get(f"{self.url}/auth/v1/user", headers=self._headers(token))
        if r.status_code != 200:
            log.warning("auth rejected token: %s %s", r.status_code, snippet(r.text, 200))
            raise AuthenticationError("Invalid authentication")
        user = r.json()
        if not isinstance(user, dict) or not user.get("id"):
            raise AuthenticationError("Invalid authentication")
        return user

    async def insert_itinerary(self, token: str, row: dict) -> dict:
        r = await self.http.post(
            f"{self.url}/rest/v1/{TABLE}",
            headers=self._headers(token, Prefer="return=representation"),
            json=row,
        )
        if r.status_code >= 300:
            log.error("insert failed: %s %s", r.status_code, snippet(r.text, 400))
            raise PersistenceError(f"Failed to save itinerary: {r.status_code} - {snippet(r.text)}")
        rows = r.json()
        if isinstance(rows, list):
            if not rows:
                raise PersistenceError("Failed to save itinerary: no row returned")
            return rows[0]
        return rows

    async def list_itineraries(self, token: str, user_id: str) -> List[dict]:
        params = {"select": "*", "user_id": f"eq.{user_id}", "order": "created_at.desc"}
        r = await self.http.get(f"{self.url}/rest/v1/{TABLE}", headers=self._headers(token), params=params)
        if r.status_code != 200:
            raise PersistenceError(f"Failed to load itineraries: {r.status_code} - {snippet(r.text)}")
        return r.json() or []

    async def delete_itinerary(self, token: str, user_id: str, itinerary_id: str) -> None:
        params = {"id": f"eq.{itinerary_id}", "user_id": f"eq.{user_id}"}
        r = await self.http.delete(
            f"{self.url}/rest/v1/{TABLE}",
            headers=self._headers(token, Prefer="return=representation"),
            params=params,
        )
        if r.status_code >= 300:
            raise PersistenceError(f"Failed to delete itinerary: {r.status_code} - {snippet(r.text)}")
        if not r.json():
            raise PersistenceError("Itinerary not found")
