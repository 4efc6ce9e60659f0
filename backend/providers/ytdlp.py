# providers/ytdlp.py
# yt-dlp shell-out: download mp4 + info json into a temp dir

import asyncio
import glob
import json
import logging
import os
import shutil
import tempfile
from models import DownloadedVideo
from errors import ConfigurationError, UpstreamError
from utils import snippet

log = logging.getLogger("cliptotrip.ytdlp")

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
VIDEO_EXTS = (".mp4", ".webm", ".mov", ".m4a")


class YtDlpDownloader:
    name = "ytdlp"

    def __init__(self, binary: str = "yt-dlp", timeout_s: float = 120.0):
        self.binary = binary
        self.timeout_s = timeout_s

    def command(self, video_url: str, out_dir: str) -> list:
        return [
            self.binary,
            "--no-playlist",
            "--write-info-json",
            "-f", "mp4/best",
            "--user-agent", USER_AGENT,
            "--referer", "https://www.tiktok.com/",
            "-o", os.path.join(out_dir, "video.%(ext)s"),
            video_url,
        ]

    async def download(self, video_url: str) -> DownloadedVideo:
        exe = shutil.which(self.binary)
        if not exe:
            raise ConfigurationError(f"yt-dlp executable not found: {self.binary}")

        with tempfile.TemporaryDirectory(prefix="cliptotrip-") as tmpdir:
            cmd = self.command(video_url, tmpdir)
            cmd[0] = exe
            log.info("running yt-dlp for %s", video_url)
            proc = await asyncio.create_subprocess_exec(
                *cmd, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE,
            )
            try:
                _, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout_s)
            except asyncio.TimeoutError:
                proc.kill()
                await proc.wait()
                raise UpstreamError(f"yt-dlp timed out after {self.timeout_s:.0f}s")
            if proc.returncode != 0:
                err = (stderr or b"").decode("utf-8", "replace")
                raise UpstreamError(f"yt-dlp failed ({proc.returncode}): {snippet(err)}")

            return self._collect(tmpdir)

    def _collect(self, tmpdir: str) -> DownloadedVideo:
        info = {}
        for path in glob.glob(os.path.join(tmpdir, "*.info.json")):
            with open(path, encoding="utf-8") as f:
                info = json.load(f)
            break

        videos = [p for p in glob.glob(os.path.join(tmpdir, "video.*")) if p.endswith(VIDEO_EXTS)]
        if not videos:
            raise UpstreamError("yt-dlp finished but no video file was written")
        with open(videos[0], "rb") as f:
            content = f.read()

        return DownloadedVideo(
            content=content,
            filename=os.path.basename(videos[0]),
            caption=info.get("description") or info.get("title") or "",
            thumbnail=info.get("thumbnail"),
        )
