# Run from project root: uvicorn taskrelay.main:app --reload

import logging

from fastapi import FastAPI

from taskrelay.api.routes import router
from taskrelay.mcp.server import mcp_router

logging.basicConfig(level=logging.INFO)


app = FastAPI(title="taskrelay")
app.include_router(router)
app.include_router(mcp_router, prefix="/mcp")
