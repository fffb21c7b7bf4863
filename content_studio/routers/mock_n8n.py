"""
Mock generation webhook: POST /api/mock-n8n with {identifier, data}.
Also served as a standalone ASGI app so the gateway can call it in-process.
"""
import json

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from content_studio.context import AppContext
from content_studio.deps import get_context
from content_studio.logging_config import get_logger
from content_studio.services.mock_workflow import MockWorkflow, MockWorkflowError, error_body

router = APIRouter(prefix="/api", tags=["mock-n8n"])
logger = get_logger(__name__)

MOCK_PATH = "/api/mock-n8n"


async def answer(workflow: MockWorkflow, request: Request) -> JSONResponse:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse(status_code=400, content={"error": "Request body must be JSON"})
    try:
        result = await workflow.handle(body)
    except MockWorkflowError as e:
        logger.info("mock_n8n.rejected", error=e.message)
        status, content = error_body(e)
        return JSONResponse(status_code=status, content=content)
    return JSONResponse(content=result)


@router.post("/mock-n8n")
async def mock_n8n(request: Request, ctx: AppContext = Depends(get_context)) -> JSONResponse:
    return await answer(ctx.mock_workflow, request)


def build_mock_app(workflow: MockWorkflow) -> FastAPI:
    """Minimal app exposing only the mock webhook route."""
    app = FastAPI(title="Mock n8n workflow")

    @app.post(MOCK_PATH)
    async def _mock(request: Request) -> JSONResponse:
        return await answer(workflow, request)

    return app
