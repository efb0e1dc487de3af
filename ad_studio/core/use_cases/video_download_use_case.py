import logging
from ad_studio.core.domain.entities import GeneratedVideo
from ad_studio.core.domain.errors import VideoNotFoundError
from ad_studio.core.ports.inbound import VideoDownloadUseCasePort
from ad_studio.core.ports.outbound import VideoGenerationPort

logger = logging.getLogger(__name__)

class VideoDownloadUseCase(VideoDownloadUseCasePort):
    """Fetches a finished video so it can be served without exposing the provider key"""

    def __init__(self, video_service: VideoGenerationPort):
        self.video_service = video_service

    async def download_video(self, video: GeneratedVideo) -> bytes:
        logger.info("Fetching generated video", extra={"video_filename": video.filename})

        try:
            video_content = await self.video_service.download_video(video.uri)
        except VideoNotFoundError:
            # Provider download links expire after a while
            logger.warning("Generated video no longer available", extra={"video_filename": video.filename})
            raise

        logger.info("Generated video fetched", extra={
            "video_filename": video.filename,
            "content_size_mb": round(len(video_content) / 1024 / 1024, 2)
        })
        return video_content
