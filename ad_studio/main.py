import uvicorn
from ad_studio.app import create_app
from ad_studio.infrastructure.config import config
from ad_studio.logging_config import setup_logging

# Setup logging
logger = setup_logging(config.SERVICE_NAME, config.LOG_LEVEL)

app = create_app()

logger.info("AI Ad Studio ready", extra={
    "script_model": config.SCRIPT_MODEL,
    "video_model": config.VIDEO_MODEL
})

def run():
    """Console entry point"""
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_config=None)

if __name__ == "__main__":
    run()
