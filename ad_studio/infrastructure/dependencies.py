# Dependency injection and composition root
from google import genai
from ad_studio.core.use_cases.ad_script_use_case import AdScriptUseCase
from ad_studio.core.use_cases.ad_video_use_case import AdVideoUseCase
from ad_studio.core.use_cases.video_download_use_case import VideoDownloadUseCase
from ad_studio.adapters.external.gemini_script_adapter import GeminiScriptAdapter
from ad_studio.adapters.external.gemini_video_adapter import GeminiVideoAdapter
from ad_studio.adapters.http.controllers import StudioController
from ad_studio.infrastructure.config import Config, config as default_config
from ad_studio.infrastructure.prompts import PromptTemplates
from ad_studio.infrastructure.session_store import SessionStore

def setup_dependencies(config: Config = None, client=None) -> StudioController:
    """Setup dependency injection and return configured controller"""

    config = config or default_config

    # Missing credential is fatal before anything else is built
    config.validate()

    client = client or genai.Client(api_key=config.API_KEY)

    # External adapters (outbound ports)
    script_adapter = GeminiScriptAdapter(
        client=client,
        model=config.SCRIPT_MODEL,
        temperature=config.SCRIPT_TEMPERATURE,
        top_p=config.SCRIPT_TOP_P
    )

    video_adapter = GeminiVideoAdapter(
        client=client,
        api_key=config.API_KEY,
        model=config.VIDEO_MODEL,
        poll_interval=config.VIDEO_POLL_INTERVAL_SECONDS,
        max_wait_seconds=config.VIDEO_MAX_WAIT_SECONDS,
        download_timeout=config.VIDEO_DOWNLOAD_TIMEOUT_SECONDS
    )

    # Use cases (application layer)
    ad_script_use_case = AdScriptUseCase(script_service=script_adapter)

    ad_video_use_case = AdVideoUseCase(
        video_service=video_adapter,
        prompt_template=PromptTemplates.VIDEO_AD_TEMPLATE
    )

    video_download_use_case = VideoDownloadUseCase(video_service=video_adapter)

    # HTTP controller (inbound adapter)
    controller = StudioController(
        ad_script_use_case=ad_script_use_case,
        ad_video_use_case=ad_video_use_case,
        video_download_use_case=video_download_use_case,
        session_store=SessionStore(
            message_interval=config.LOADING_MESSAGE_INTERVAL_SECONDS,
            idle_timeout=config.SESSION_IDLE_TIMEOUT_SECONDS,
            max_sessions=config.MAX_SESSIONS
        ),
        session_cookie_name=config.SESSION_COOKIE_NAME,
        max_upload_bytes=config.MAX_UPLOAD_BYTES
    )

    return controller
