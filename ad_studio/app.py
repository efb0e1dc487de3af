from pathlib import Path
from typing import Optional
from fastapi import FastAPI, File, Request, Response, UploadFile
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from ad_studio.adapters.http.controllers import StudioController
from ad_studio.adapters.http.models import ResetRequestModel, ScriptRequestModel, SessionViewModel
from ad_studio.infrastructure.config import config
from ad_studio.infrastructure.dependencies import setup_dependencies
from ad_studio.infrastructure.middleware import LoggingMiddleware

STATIC_DIR = Path(__file__).resolve().parent / "static"

def create_app(controller: StudioController = None) -> FastAPI:
    """Build the FastAPI app; raises ConfigurationError when the API key is missing"""

    # Setup dependencies
    controller = controller or setup_dependencies()

    # Initialize FastAPI app
    app = FastAPI(title=config.APP_TITLE, version=config.APP_VERSION)
    app.state.controller = controller

    # Add middleware
    app.add_middleware(LoggingMiddleware)

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    # Routes
    @app.get("/", include_in_schema=False)
    async def index():
        """Single-page studio UI"""
        return FileResponse(STATIC_DIR / "index.html")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/session", response_model=SessionViewModel)
    async def get_session(request: Request, response: Response):
        """Current UI state, including the rotating video status message"""
        session = controller.resolve_session(request, response)
        return controller.view(session)

    @app.post("/session/image", response_model=SessionViewModel)
    async def select_image(request: Request, response: Response, file: UploadFile = File(...)):
        """Select a product image; clears any previous script and video"""
        session = controller.resolve_session(request, response)
        return await controller.select_image(session, file)

    @app.get("/session/image")
    async def get_image(request: Request):
        return controller.image(controller.existing_session(request))

    @app.delete("/session/image", response_model=SessionViewModel)
    async def clear_image(request: Request, response: Response):
        """Hard reset: forget the image as well as the script and video"""
        session = controller.resolve_session(request, response)
        return controller.reset(session, hard=True)

    @app.post("/session/script", response_model=SessionViewModel)
    async def generate_script(body: ScriptRequestModel, request: Request, response: Response):
        """Generate an ad script from the selected image"""
        session = controller.resolve_session(request, response)
        return await controller.generate_script(session, body.description or "")

    @app.get("/session/script.txt")
    async def script_text(request: Request):
        return controller.script_text(controller.existing_session(request))

    @app.post("/session/video", response_model=SessionViewModel)
    async def generate_video(request: Request, response: Response):
        """Start video generation; poll GET /session for progress"""
        session = controller.resolve_session(request, response)
        return controller.start_video(session)

    @app.get("/session/video")
    async def download_video(request: Request):
        """Proxy endpoint to download the generated video"""
        return await controller.download_video(controller.existing_session(request), request)

    @app.post("/session/reset", response_model=SessionViewModel)
    async def reset(request: Request, response: Response, body: Optional[ResetRequestModel] = None):
        session = controller.resolve_session(request, response)
        return controller.reset(session, hard=bool(body and body.hard))

    return app
