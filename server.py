"""
HTTP service around the body-segment measurement engine.

Run with:  uvicorn server:app --host 0.0.0.0 --port 8000
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app_state import AppState
from bodymeasure import __version__
from bodymeasure.config import get_config
from bodymeasure.pose import create_provider
from routers import measure

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	state = AppState(cfg=get_config())
	try:
		state.provider = create_provider(state.cfg.pose)
		logger.info("[Pose] Using provider %s", state.provider.name())
	except RuntimeError as e:
		# Keypoint-only measurement still works without a local pose model.
		state.provider_error = str(e)
		logger.warning("[Pose] Provider unavailable: %s", e)
	app.state.state = state
	try:
		yield
	finally:
		if state.provider is not None:
			state.provider.close()
		state.provider = None


app = FastAPI(title="bodymeasure", version=__version__, lifespan=lifespan)
app.add_middleware(
	CORSMiddleware,
	allow_origins=list(get_config().api.cors_origins),
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)
app.include_router(measure.router)
