from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from src.config import APP_NAME, APP_VERSION, is_development
from src.logging_config import setup_logging, get_logger
from src.routers.budget_years import router as budget_years_router
from src.routers.funds import router as funds_router
from src.routers.categories import router as categories_router
from src.routers.incomes import router as incomes_router
from src.routers.expenses import router as expenses_router
from src.routers.tithes import router as tithes_router
from src.routers.debts import router as debts_router
from src.routers.tasks import router as tasks_router
from src.routers.notes import router as notes_router
from src.routers.assets import router as assets_router
from src.routers.settings import router as settings_router
from src.routers.cash_envelopes import router as cash_envelopes_router
from src.routers.dashboard import router as dashboard_router

setup_logging()
logger = get_logger(__name__)

app = FastAPI(title=APP_NAME, version=APP_VERSION)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} "
        f"(user: {request.headers.get('x-user-id', 'default')})"
    )
    return response


@app.exception_handler(SQLAlchemyError)
async def store_failure_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    detail = str(exc) if is_development() else "Internal server error"
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": detail})


app.include_router(budget_years_router)
app.include_router(funds_router)
app.include_router(categories_router)
app.include_router(incomes_router)
app.include_router(expenses_router)
app.include_router(tithes_router)
app.include_router(debts_router)
app.include_router(tasks_router)
app.include_router(notes_router)
app.include_router(assets_router)
app.include_router(settings_router)
app.include_router(cash_envelopes_router)
app.include_router(dashboard_router)


@app.get("/")
def read_root():
    return "Server is running."


@app.get("/health")
def health_check():
    return {
        "status": "OK",
        "timestamp": datetime.utcnow().isoformat(),
        "version": APP_VERSION,
    }
