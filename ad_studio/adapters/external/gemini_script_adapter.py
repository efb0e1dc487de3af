import logging
import time
from google.genai import types
from ad_studio.core.domain.entities import AdScript, ProductImage
from ad_studio.core.domain.errors import GenerationFailedError, RateLimitedError
from ad_studio.core.ports.outbound import ScriptGenerationPort
from ad_studio.adapters.external.provider_errors import is_rate_limited
from ad_studio.infrastructure.prompts import AD_SCRIPT_SCHEMA, PromptTemplates
from ad_studio.logging_config import log_external_api_call
from ad_studio.script_parser import parse_ad_script

logger = logging.getLogger(__name__)

class GeminiScriptAdapter(ScriptGenerationPort):
    """Adapter for multimodal script generation with Gemini"""

    def __init__(self, client, model: str = "gemini-2.5-flash", temperature: float = 0.8, top_p: float = 0.9):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.top_p = top_p

    async def generate_ad_script(self, image: ProductImage, product_description: str = "") -> AdScript:
        """Generate an ad script from the image and optional description"""

        image_part = types.Part.from_bytes(data=image.data, mime_type=image.mime_type)
        prompt = PromptTemplates.format_ad_script_prompt(product_description)

        logger.debug("Making script request", extra={"model": self.model})
        start_time = time.time()

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=[image_part, prompt],
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=AD_SCRIPT_SCHEMA,
                    temperature=self.temperature,
                    top_p=self.top_p
                )
            )
        except Exception as e:
            log_external_api_call(
                logger, "gemini", f"models/{self.model}:generateContent",
                request_size=image.size_bytes,
                response_status=getattr(e, "code", None),
                duration_ms=round((time.time() - start_time) * 1000, 2),
                error=str(e)
            )
            if is_rate_limited(e):
                raise RateLimitedError() from e
            raise GenerationFailedError() from e

        log_external_api_call(
            logger, "gemini", f"models/{self.model}:generateContent",
            request_size=image.size_bytes,
            response_status=200,
            duration_ms=round((time.time() - start_time) * 1000, 2)
        )

        ad_script = parse_ad_script(response.text)

        logger.info("Script response parsed successfully", extra={
            "title": ad_script.title,
            "scene_count": len(ad_script.scenes)
        })

        return ad_script
