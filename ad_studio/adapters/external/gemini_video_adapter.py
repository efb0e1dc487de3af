import asyncio
import logging
import requests
from typing import Awaitable, Callable, Optional
from google.genai import types
from ad_studio.core.domain.entities import ProductImage
from ad_studio.core.domain.errors import (
    GenerationFailedError, MissingResultError, QuotaExceededError,
    VideoNotFoundError, VideoTimeoutError, VIDEO_FAILED_MESSAGE
)
from ad_studio.core.ports.outbound import VideoGenerationPort
from ad_studio.adapters.external.provider_errors import is_resource_exhausted
from ad_studio.logging_config import TimingContext

logger = logging.getLogger(__name__)

def extract_video_uri(operation) -> Optional[str]:
    """Download URI of the first generated video, or None when any part is missing"""
    response = getattr(operation, "response", None)
    generated_videos = getattr(response, "generated_videos", None) or []
    if not generated_videos:
        return None
    video = getattr(generated_videos[0], "video", None)
    return getattr(video, "uri", None) or None

def append_api_key(uri: str, api_key: str) -> str:
    """The download link is only fetchable with the key as a query parameter"""
    separator = "&" if "?" in uri else "?"
    return f"{uri}{separator}key={api_key}"

def _redact(uri: str) -> str:
    return uri.split("?", 1)[0]

class GeminiVideoAdapter(VideoGenerationPort):
    """Adapter for Veo video generation"""

    def __init__(
        self,
        client,
        api_key: str,
        model: str = "veo-2.0-generate-001",
        poll_interval: float = 10.0,
        max_wait_seconds: float = 0,
        download_timeout: float = 120,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        self.client = client
        self.api_key = api_key
        self.model = model
        self.poll_interval = poll_interval
        self.max_wait_seconds = max_wait_seconds
        self.download_timeout = download_timeout
        self._sleep = sleep

    async def generate_video(self, prompt: str, image: ProductImage) -> str:
        """Submit the request, poll until done and return the credentialed URI"""
        try:
            with TimingContext("video_generation", logger, {"model": self.model}):
                operation = await self.client.aio.models.generate_videos(
                    model=self.model,
                    prompt=prompt,
                    image=types.Image(image_bytes=image.data, mime_type=image.mime_type),
                    config=types.GenerateVideosConfig(number_of_videos=1)
                )

                logger.info("Video generation initiated, polling for result", extra={
                    "poll_interval_seconds": self.poll_interval,
                    "max_wait_seconds": self.max_wait_seconds or None
                })

                operation = await self._wait_for_completion(operation)
        except (MissingResultError, VideoTimeoutError):
            raise
        except Exception as e:
            logger.error("Video generation failed", extra={
                "error": str(e),
                "error_type": type(e).__name__
            })
            if is_resource_exhausted(e):
                raise QuotaExceededError() from e
            raise GenerationFailedError(VIDEO_FAILED_MESSAGE) from e

        download_link = extract_video_uri(operation)

        if not download_link:
            logger.error("Video operation completed without a download link")
            raise MissingResultError()

        logger.info("Video generated successfully", extra={"video_uri": _redact(download_link)})
        return append_api_key(download_link, self.api_key)

    async def _wait_for_completion(self, operation):
        """One status check per poll interval until the operation reports done"""
        waited = 0.0
        while not operation.done:
            if self.max_wait_seconds and waited >= self.max_wait_seconds:
                logger.error("Video generation timed out", extra={"waited_seconds": waited})
                raise VideoTimeoutError()

            await self._sleep(self.poll_interval)
            waited += self.poll_interval
            operation = await self.client.aio.operations.get(operation)

            logger.debug("Polling video operation", extra={
                "done": bool(operation.done),
                "waited_seconds": waited
            })

        return operation

    async def download_video(self, uri: str) -> bytes:
        """Download video content"""
        try:
            logger.info("Downloading video", extra={"video_uri": _redact(uri)})

            # requests blocks, so it runs off the event loop
            response = await asyncio.to_thread(requests.get, uri, timeout=self.download_timeout)

            if response.status_code == 404:
                logger.warning("Video not found", extra={"video_uri": _redact(uri)})
                raise VideoNotFoundError()
            elif response.status_code != 200:
                logger.error("Video download failed", extra={
                    "video_uri": _redact(uri),
                    "status_code": response.status_code
                })
                raise requests.RequestException(f"Video download failed with status {response.status_code}")

            video_content = response.content

            logger.info("Video download successful", extra={
                "video_uri": _redact(uri),
                "content_size_mb": round(len(video_content) / 1024 / 1024, 2)
            })

            return video_content

        except requests.RequestException as e:
            logger.error("Network error during video download", extra={
                "video_uri": _redact(uri),
                "error": str(e)
            })
            raise
