# providers/tikmate.py
# tikmate.app lookup + mp4 download (no key)

import logging
import httpx
from models import DownloadedVideo
from errors import UpstreamError
from utils import snippet

log = logging.getLogger("cliptotrip.tikmate")

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "application/json",
}
DOWNLOAD_URL = "https://tikmate.app/download/{token}/{id}.mp4"


class TikmateDownloader:
    name = "tikmate"

    def __init__(self, http: httpx.AsyncClient, api_url: str = "https://api.tikmate.app"):
        self.http = http
        self.api_url = api_url.rstrip("/")

    async def lookup(self, video_url: str) -> dict:
        r = await self.http.post(f"{self.api_url}/api/lookup", data={"url": video_url}, headers=HEADERS)
        if r.status_code != 200:
            raise UpstreamError(f"TikTok lookup failed: {r.status_code} - {snippet(r.text)}", status=r.status_code)
        try:
            data = r.json()
        except ValueError as e:
            raise UpstreamError("TikTok lookup returned a non-JSON response") from e
        if not isinstance(data, dict):
            raise UpstreamError("TikTok lookup returned an unexpected payload")
        if not data.get("success") or not data.get("token") or not data.get("id"):
            raise UpstreamError(f"TikTok lookup failed: {data.get('message') or 'video not found'}")
        return data

    async def download(self, video_url: str) -> DownloadedVideo:
        meta = await self.lookup(video_url)
        url = DOWNLOAD_URL.format(token=meta["token"], id=meta["id"])
        log.info("downloading %s via tikmate", meta["id"])
        r = await self.http.get(url, headers={"User-Agent": HEADERS["User-Agent"]}, follow_redirects=True)
        if r.status_code != 200:
            raise UpstreamError(f"TikTok download failed: {r.status_code}", status=r.status_code)
        if not r.content:
            raise UpstreamError("TikTok download returned an empty file")
        return DownloadedVideo(
            content=r.content,
            filename=f"{meta['id']}.mp4",
            caption=meta.get("desc") or "",
            thumbnail=meta.get("cover"),
        )
