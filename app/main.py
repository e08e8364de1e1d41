import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app import __version__
from app.api import create_api_router
from app.core.config import Settings, get_settings
from app.core.container import build_container
from app.core.logging import configure_logging
from app.infrastructure.database import dispose_engine, init_db
from app.interfaces.http.deps import get_ledger_service
from app.modules.ledger import LedgerService, LedgerStoreError

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent


def _resolve_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.container.init_infrastructure()
    await init_db()
    yield
    await dispose_engine()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level, fmt=settings.logging.format)
    templates = Jinja2Templates(directory=str(_resolve_path(settings.template_dir)))

    app = FastAPI(
        title=settings.project_name,
        description="CSV transaction ingestion and account balances",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = build_container(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request, service: LedgerService = Depends(get_ledger_service)):
        try:
            report = await service.build_report()
        except LedgerStoreError as exc:
            logger.exception("Failed to load dashboard data")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load the dashboard"
            ) from exc
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "report": report,
                "api_prefix": settings.api_prefix,
                "project_name": settings.project_name,
            },
        )

    return app


app = create_app()
