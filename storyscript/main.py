import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from storyscript.api.routes import router
from storyscript.config import settings_from_env

# Local `.env` never overrides the real environment.
_project_root = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=_project_root / ".env", override=False)

settings = settings_from_env()

app = FastAPI(title="storyscript", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)
logger.info("storyscript configured (max_depth=%d)", settings.max_depth)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "storyscript", "version": "0.1.0"}
