import logging
from ad_studio.core.domain.entities import AdScript, GeneratedVideo, ProductImage
from ad_studio.core.domain.errors import AdStudioError, GenerationFailedError, VIDEO_FAILED_MESSAGE
from ad_studio.core.ports.inbound import AdVideoUseCasePort
from ad_studio.core.ports.outbound import VideoGenerationPort

logger = logging.getLogger(__name__)

class AdVideoUseCase(AdVideoUseCasePort):
    """Use case for turning an ad script into a video ad"""

    def __init__(self, video_service: VideoGenerationPort, prompt_template: str):
        self.video_service = video_service
        self.prompt_template = prompt_template

    def build_prompt(self, ad_script: AdScript) -> str:
        """Fill the video prompt template from the script"""
        return self.prompt_template.format(
            title=ad_script.title,
            tagline=ad_script.tagline,
            key_visuals=ad_script.key_visuals()
        )

    async def generate_video(self, ad_script: AdScript, image: ProductImage) -> GeneratedVideo:
        """Generate a video ad for a script"""

        prompt = self.build_prompt(ad_script)

        logger.info("Starting video ad generation", extra={
            "title": ad_script.title,
            "scene_count": len(ad_script.scenes),
            "prompt_length": len(prompt)
        })

        try:
            uri = await self.video_service.generate_video(prompt, image)
        except AdStudioError:
            raise
        except Exception as e:
            logger.error("Unexpected error from video service", extra={
                "error": str(e),
                "error_type": type(e).__name__
            })
            raise GenerationFailedError(VIDEO_FAILED_MESSAGE) from e

        video = GeneratedVideo(uri=uri, filename=ad_script.video_filename())

        logger.info("Video ad generated successfully", extra={"video_filename": video.filename})
        return video
