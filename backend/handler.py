# handler.py
# Request pipeline: validate -> auth -> acquire -> generate -> insert.
# Nothing is written unless every earlier stage succeeded.

from __future__ import annotations
import logging
from typing import List
import httpx
from acquisition import ContentAcquirer, build_acquirer
from config import Settings
from errors import ConfigurationError, RequestError
from generator import generate_itinerary
from models import ProcessRequest, SavedItinerary
from providers.openai import OpenAIClient
from providers.supabase import SupabaseClient
from utils import bearer_token, clean_video_url

log = logging.getLogger("cliptotrip.handler")


def require_config(settings: Settings) -> None:
    missing = settings.missing()
    if missing:
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")


async def authenticate(settings: Settings, http: httpx.AsyncClient, authorization: str | None):
    """Returns (supabase client, caller token, user dict)."""
    token = bearer_token(authorization)
    supabase = SupabaseClient(http, settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
    user = await supabase.get_user(token)
    return supabase, token, user


async def process_video(
    req: ProcessRequest,
    authorization: str | None,
    settings: Settings,
    http: httpx.AsyncClient,
    acquirer: ContentAcquirer | None = None,
) -> SavedItinerary:
    video_url = (req.videoUrl or "").strip()
    if not video_url:
        raise RequestError("Video URL is required")
    require_config(settings)
    supabase, token, user = await authenticate(settings, http, authorization)

    log.info("processing TikTok video %s for user %s", video_url, user["id"])
    acquirer = acquirer or build_acquirer(settings, http)
    bundle = await acquirer.acquire(clean_video_url(video_url))
    log.info("content acquired via %s: location=%s", acquirer.name, bundle.location)

    openai = OpenAIClient(http, settings.OPENAI_API_KEY, settings.OPENAI_BASE_URL)
    itinerary = await generate_itinerary(openai, bundle, settings.OPENAI_ITINERARY_MODEL)

    row = await supabase.insert_itinerary(token, {
        "user_id": user["id"],
        "title": itinerary.title,
        "location": itinerary.location,
        "duration": itinerary.duration,
        "video_url": video_url,
        "transcription": bundle.transcription,
        "caption_text": bundle.caption,
        "screen_text": bundle.screenText,
        "itinerary_content": [d.model_dump() for d in itinerary.days],
    })
    saved = SavedItinerary.from_row(row)
    log.info("saved itinerary %s", saved.id)
    return saved


async def list_saved(authorization: str | None, settings: Settings, http: httpx.AsyncClient) -> List[SavedItinerary]:
    require_config(settings)
    supabase, token, user = await authenticate(settings, http, authorization)
    rows = await supabase.list_itineraries(token, user["id"])
    return [SavedItinerary.from_row(r) for r in rows]


async def delete_saved(itinerary_id: str, authorization: str | None, settings: Settings,
                       http: httpx.AsyncClient) -> None:
    require_config(settings)
    supabase, token, user = await authenticate(settings, http, authorization)
    await supabase.delete_itinerary(token, user["id"], itinerary_id)
    log.info("deleted itinerary %s", itinerary_id)
