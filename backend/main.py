import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from backend.auth import passwords
from backend.core import config
from backend.core.errors import (
    TrackerError,
    tracker_error_handler,
    unexpected_error_handler,
    validation_error_handler,
)
from backend.database import Base, engine, ensure_progress_schema
from backend.models import progress, user  # noqa: F401  registers tables on Base
from backend.routes import auth_routes, progress_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # fatal when JWT_SECRET_KEY is unset
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_progress_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')
    # unknown-email logins check this hash; build it before the first request
    passwords.dummy_hash()
    yield


app = FastAPI(title='Coding Progress Tracker API', lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.add_exception_handler(TrackerError, tracker_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(Exception, unexpected_error_handler)


@app.get('/')
def root():
    return {'message': 'Coding Progress Tracker API is running!'}


app.include_router(auth_routes.router, prefix='/api/auth')
app.include_router(progress_routes.router, prefix='/api/progress')
