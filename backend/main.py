import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.core import config
from backend.core.errors import InternalError, ValidationError
from backend.database import engine
from backend.models import user
from backend.routes import auth_routes

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title='RuralEdu API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, headers: dict | None = None, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={'success': False, 'message': message, **extra},
        headers=headers,
    )


def _validation_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get('loc', ()) if part != 'body']
        errors.append({
            'field': '.'.join(location) or 'body',
            'message': error.get('msg', 'Invalid value'),
        })
    return errors


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else 'Request failed'
    extra = {}
    if isinstance(exc, ValidationError) and exc.errors:
        extra['errors'] = exc.errors
    return _error_response(exc.status_code, message, getattr(exc, 'headers', None), **extra)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError(errors=_validation_errors(exc))
    return _error_response(error.status_code, error.detail, errors=error.errors)


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception('Database error on %s %s', request.method, request.url.path)
    error = InternalError()
    return _error_response(error.status_code, error.detail)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message)


@app.on_event('startup')
def initialize_application() -> None:
    config.validate_runtime_config()
    try:
        user.Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'RuralEdu API Running'}


app.include_router(auth_routes.router, prefix='/api/auth')
