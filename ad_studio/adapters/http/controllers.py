import asyncio
import logging
from typing import Optional
from fastapi import Request, HTTPException, UploadFile
from fastapi.responses import Response, PlainTextResponse
from ad_studio.core.domain.entities import AdScript, ProductImage
from ad_studio.core.domain.errors import AdStudioError, VideoNotFoundError, VIDEO_FAILED_MESSAGE
from ad_studio.core.domain.session import StudioSession
from ad_studio.core.ports.inbound import AdScriptUseCasePort, AdVideoUseCasePort, VideoDownloadUseCasePort
from ad_studio.adapters.http.models import SessionViewModel
from ad_studio.adapters.http.uploads import read_product_image
from ad_studio.infrastructure.session_store import SessionStore

logger = logging.getLogger(__name__)

class StudioController:
    """HTTP controller for the ad studio endpoints"""

    def __init__(
        self,
        ad_script_use_case: AdScriptUseCasePort,
        ad_video_use_case: AdVideoUseCasePort,
        video_download_use_case: VideoDownloadUseCasePort,
        session_store: SessionStore,
        session_cookie_name: str = "ad_studio_session",
        max_upload_bytes: int = 20 * 1024 * 1024
    ):
        self.ad_script_use_case = ad_script_use_case
        self.ad_video_use_case = ad_video_use_case
        self.video_download_use_case = video_download_use_case
        self.session_store = session_store
        self.session_cookie_name = session_cookie_name
        self.max_upload_bytes = max_upload_bytes

    def resolve_session(self, request: Request, response: Optional[Response] = None) -> StudioSession:
        """Look up the caller's session from its cookie, creating one if needed"""
        session_id = request.cookies.get(self.session_cookie_name)
        session, created = self.session_store.get_or_create(session_id)

        if created and response is not None:
            response.set_cookie(self.session_cookie_name, session.session_id, httponly=True, samesite="lax")

        return session

    def existing_session(self, request: Request) -> StudioSession:
        session = self.session_store.get(request.cookies.get(self.session_cookie_name))
        if session is None:
            raise HTTPException(status_code=404, detail="No active session")
        return session

    def view(self, session: StudioSession) -> SessionViewModel:
        return SessionViewModel.from_session(session)

    async def select_image(self, session: StudioSession, upload: UploadFile) -> SessionViewModel:
        """Handle a product image upload"""
        image = await read_product_image(upload, self.max_upload_bytes)
        session.select_image(image)
        return self.view(session)

    async def generate_script(self, session: StudioSession, description: str = "") -> SessionViewModel:
        """Handle ad script generation request"""

        if session.is_loading:
            logger.info("Script generation already in progress", extra={"session_id": session.session_id})
            return self.view(session)

        if not session.begin_script(description):
            logger.info("Script requested without an image", extra={"session_id": session.session_id})
            return self.view(session)

        image = session.image
        script_request = session.script_request

        ad_script = None
        failure = None
        try:
            ad_script = await self.ad_script_use_case.generate_script(image, session.description)
        except AdStudioError as e:
            logger.error("Script generation failed", extra={
                "session_id": session.session_id,
                "error": e.user_message,
                "error_type": type(e).__name__
            })
            failure = e

        # Any reset or newer request while the call was in flight makes the outcome stale
        if session.script_request != script_request:
            logger.info("Discarding script outcome for a session that moved on", extra={"session_id": session.session_id})
            return self.view(session)

        if failure is not None:
            session.script_failed(failure.user_message, failure.retryable)
        else:
            session.script_succeeded(ad_script)
        return self.view(session)

    def start_video(self, session: StudioSession) -> SessionViewModel:
        """Kick off video generation in the background and return immediately"""

        if not session.begin_video():
            return self.view(session)

        session.video_task = asyncio.create_task(
            self.run_video(session, session.ad_script, session.image)
        )

        logger.info("Video generation task started", extra={"session_id": session.session_id})
        return self.view(session)

    async def run_video(self, session: StudioSession, ad_script: AdScript, image: ProductImage) -> None:
        """Background body of a video request; records the outcome on the session"""
        try:
            video = await self.ad_video_use_case.generate_video(ad_script, image)
        except AdStudioError as e:
            logger.error("Video generation failed", extra={
                "session_id": session.session_id,
                "error": e.user_message,
                "error_type": type(e).__name__
            })
            session.video_failed(e.user_message)
            return
        except Exception as e:
            logger.exception("Unexpected error during video generation", extra={
                "session_id": session.session_id,
                "error_type": type(e).__name__
            })
            session.video_failed(VIDEO_FAILED_MESSAGE)
            return

        session.video_succeeded(video)

    def reset(self, session: StudioSession, hard: bool = False) -> SessionViewModel:
        """Handle soft or hard reset"""
        if hard:
            session.hard_reset()
        else:
            session.reset()

        logger.info("Session reset", extra={"session_id": session.session_id, "hard": hard})
        return self.view(session)

    def image(self, session: StudioSession) -> Response:
        """Serve the selected image for preview"""
        if not session.image:
            raise HTTPException(status_code=404, detail="No image selected")

        return Response(content=session.image.data, media_type=session.image.mime_type)

    def script_text(self, session: StudioSession) -> PlainTextResponse:
        """Serve the script as copyable plain text"""
        if not session.ad_script:
            raise HTTPException(status_code=404, detail="No script generated")

        return PlainTextResponse(session.ad_script.to_text())

    async def download_video(self, session: StudioSession, request: Request) -> Response:
        """Handle video download request"""

        if not session.video:
            raise HTTPException(status_code=404, detail="No video generated")

        try:
            client_ip = request.client.host if request.client else "unknown"
            logger.info("Video download request", extra={
                "video_filename": session.video.filename,
                "client_ip": client_ip
            })

            # Execute use case
            video_content = await self.video_download_use_case.download_video(session.video)

            # Return response
            return Response(
                content=video_content,
                media_type="video/mp4",
                headers={
                    "Content-Disposition": f'attachment; filename="{session.video.filename}"',
                    "Content-Length": str(len(video_content))
                }
            )

        except VideoNotFoundError:
            raise HTTPException(status_code=404, detail="Video not found or has expired")
        except Exception as e:
            logger.error("Unexpected error during video download", extra={
                "video_filename": session.video.filename,
                "error": str(e),
                "error_type": type(e).__name__
            })
            raise HTTPException(status_code=502, detail="Video download failed")
