import logging
from ad_studio.core.domain.entities import AdScript, ProductImage
from ad_studio.core.domain.errors import AdStudioError, GenerationFailedError
from ad_studio.core.ports.inbound import AdScriptUseCasePort
from ad_studio.core.ports.outbound import ScriptGenerationPort

logger = logging.getLogger(__name__)

class AdScriptUseCase(AdScriptUseCasePort):
    """Use case for generating an ad script from a product image"""

    def __init__(self, script_service: ScriptGenerationPort):
        self.script_service = script_service

    async def generate_script(self, image: ProductImage, product_description: str = "") -> AdScript:
        """Generate an ad script"""

        logger.info("Starting ad script generation", extra={
            "mime_type": image.mime_type,
            "image_size_bytes": image.size_bytes,
            "has_description": bool(product_description)
        })

        try:
            ad_script = await self.script_service.generate_ad_script(image, product_description)
        except AdStudioError:
            raise
        except Exception as e:
            logger.error("Unexpected error from script service", extra={
                "error": str(e),
                "error_type": type(e).__name__
            })
            raise GenerationFailedError() from e

        logger.info("Ad script generated successfully", extra={
            "title": ad_script.title,
            "scene_count": len(ad_script.scenes)
        })

        return ad_script
