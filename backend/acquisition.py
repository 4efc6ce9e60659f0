# acquisition.py
# Content acquisition: video URL -> ContentBundle (transcript, caption,
# on-screen text, location, activities). Strategy picked by CONTENT_STRATEGY.

from __future__ import annotations
import logging
from typing import Protocol
import httpx
from config import Settings
from errors import ConfigurationError, ContentUnresolvableError, UpstreamError
from models import UNKNOWN_LOCATION, ContentBundle, DownloadedVideo
from providers.openai import OpenAIClient
from providers.tikmate import TikmateDownloader
from providers.ytdlp import YtDlpDownloader
from utils import as_list, as_text, parse_model_json

log = logging.getLogger("cliptotrip.acquisition")

NO_SCREEN_TEXT = "No on-screen text detected"

INFER_SYSTEM = (
    "You are a travel expert AI that analyzes TikTok travel videos. You only have the "
    "video URL; infer the most plausible content from it (creator handle, slug, any "
    "place names). Respond with a JSON object with keys: transcription (what the creator "
    "likely says), caption, screenText (text likely shown on screen: places, prices), "
    f"location (\"City, Country\", or \"{UNKNOWN_LOCATION}\" if it cannot be inferred), "
    "activities (list of short strings)."
)

EXTRACT_SYSTEM = (
    "You extract travel information from TikTok video content. Respond with a JSON "
    f"object with keys: location (\"City, Country\", or \"{UNKNOWN_LOCATION}\" if the "
    "content does not identify a place) and activities (list of short strings naming "
    "things to do mentioned or shown)."
)

VISION_PROMPT = (
    "This is a frame from a TikTok travel video. List any text visible on screen "
    "(place names, prices, captions). Reply with the text only."
)


def ensure_location(bundle: ContentBundle) -> ContentBundle:
    loc = (bundle.location or "").strip()
    if not loc or loc.lower() == UNKNOWN_LOCATION.lower():
        raise ContentUnresolvableError("Could not determine a travel location from the video content")
    return bundle


class ContentAcquirer(Protocol):
    name: str

    async def acquire(self, video_url: str) -> ContentBundle: ...


class Downloader(Protocol):
    name: str

    async def download(self, video_url: str) -> DownloadedVideo: ...


class InferredAcquirer:
    """Language-model-only: no download, content inferred from the URL."""

    name = "inferred"

    def __init__(self, openai: OpenAIClient, model: str):
        self.openai = openai
        self.model = model

    async def acquire(self, video_url: str) -> ContentBundle:
        content = await self.openai.chat(
            [
                {"role": "system", "content": INFER_SYSTEM},
                {"role": "user", "content": f"TikTok video URL: {video_url}"},
            ],
            model=self.model,
            temperature=0.7,
            json_mode=True,
        )
        data = parse_model_json(content, "Content analysis")
        bundle = ContentBundle(
            transcription=as_text(data.get("transcription")),
            caption=as_text(data.get("caption")),
            screenText=as_text(data.get("screenText") or data.get("screen_text")),
            location=as_text(data.get("location")) or UNKNOWN_LOCATION,
            activities=as_list(data.get("activities")),
        )
        return ensure_location(bundle)


class DownloadAcquirer:
    """Download the video, then whisper + vision + location extraction."""

    def __init__(self, downloader: Downloader, openai: OpenAIClient, chat_model: str, vision_model: str):
        self.downloader = downloader
        self.openai = openai
        self.chat_model = chat_model
        self.vision_model = vision_model
        self.name = downloader.name

    async def read_screen_text(self, thumbnail: str | None) -> str:
        # vision is best effort: any failure degrades to the fixed string
        if not thumbnail:
            return NO_SCREEN_TEXT
        try:
            text = await self.openai.describe_image(thumbnail, VISION_PROMPT, model=self.vision_model)
        except UpstreamError as e:
            log.warning("vision analysis failed, using fallback: %s", e)
            return NO_SCREEN_TEXT
        return text or NO_SCREEN_TEXT

    async def acquire(self, video_url: str) -> ContentBundle:
        video = await self.downloader.download(video_url)
        log.info("downloaded %s (%d bytes)", video.filename, len(video.content))

        transcription = await self.openai.transcribe(video.content, video.filename)
        screen_text = await self.read_screen_text(video.thumbnail)

        content = await self.openai.chat(
            [
                {"role": "system", "content": EXTRACT_SYSTEM},
                {"role": "user", "content": (
                    f"Caption: {video.caption or '(none)'}\n"
                    f"Transcription: {transcription or '(none)'}\n"
                    f"Screen text: {screen_text}"
                )},
            ],
            model=self.chat_model,
            temperature=0.2,
            json_mode=True,
        )
        data = parse_model_json(content, "Location extraction")
        bundle = ContentBundle(
            transcription=transcription,
            caption=video.caption,
            screenText=screen_text,
            location=as_text(data.get("location")) or UNKNOWN_LOCATION,
            activities=as_list(data.get("activities")),
        )
        return ensure_location(bundle)


def build_acquirer(settings: Settings, http: httpx.AsyncClient) -> ContentAcquirer:
    openai = OpenAIClient(http, settings.OPENAI_API_KEY, settings.OPENAI_BASE_URL)
    strategy = settings.CONTENT_STRATEGY
    if strategy == "inferred":
        return InferredAcquirer(openai, settings.OPENAI_CHAT_MODEL)
    if strategy == "tikmate":
        downloader = TikmateDownloader(http, settings.TIKMATE_API_URL)
    elif strategy == "ytdlp":
        downloader = YtDlpDownloader(settings.YTDLP_BIN, timeout_s=max(settings.HTTP_TIMEOUT_S, 120.0))
    else:
        raise ConfigurationError(f"Unknown CONTENT_STRATEGY: {strategy}")
    return DownloadAcquirer(downloader, openai, settings.OPENAI_CHAT_MODEL, settings.OPENAI_VISION_MODEL)
