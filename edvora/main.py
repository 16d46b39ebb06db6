import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from edvora.core import config
from edvora.core.errors import AppError
from edvora.core.logging import configure_logging
from edvora.routes import auth_routes, event_routes, pomodoro_routes, stats_routes, task_routes
from edvora.storage.base import Storage
from edvora.storage.factory import build_storage

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'success': False, 'error': message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return 'Invalid request'
    first = errors[0]
    location = '.'.join(str(part) for part in first.get('loc', ()) if part != 'body')
    message = first.get('msg', 'Invalid value')
    return f'{location}: {message}' if location else message


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error('%s %s failed', request.method, request.url.path, exc_info=exc)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return _error(400, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
        return _error(500, 'Internal server error')


def create_app(storage: Storage | None = None) -> FastAPI:
    configure_logging()
    config.validate_runtime_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.storage.close()

    app = FastAPI(title=config.APP_NAME, version=config.APP_VERSION, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    app.state.storage = storage if storage is not None else build_storage()
    logger.info('Database: %s', app.state.storage.description)

    @app.get('/')
    def root():
        return {
            'success': True,
            'message': 'Welcome to Edvora Student Platform API',
            'version': config.APP_VERSION,
            'mode': app.state.storage.mode,
            'endpoints': {
                'auth': ['POST /api/auth/register', 'POST /api/auth/login', 'GET /api/auth/profile', 'PUT /api/auth/profile'],
                'tasks': ['GET /api/tasks', 'POST /api/tasks', 'PUT /api/tasks/:id', 'DELETE /api/tasks/:id'],
                'events': ['GET /api/events', 'POST /api/events', 'PUT /api/events/:id', 'DELETE /api/events/:id'],
                'pomodoro': ['GET /api/pomodoro/sessions', 'POST /api/pomodoro/sessions', 'GET /api/pomodoro/stats'],
                'stats': ['GET /api/stats', 'GET /api/quote'],
            },
            'health': '/health',
        }

    @app.get('/health')
    def health():
        storage = app.state.storage
        return {
            'success': True,
            'status': 'OK',
            'server': 'Running',
            'database': storage.description,
            'mode': storage.mode,
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'note': 'Data persists in database' if storage.persistent else 'Data lost on server restart',
        }

    app.include_router(auth_routes.router, prefix='/api/auth')
    app.include_router(task_routes.router, prefix='/api/tasks')
    app.include_router(event_routes.router, prefix='/api/events')
    app.include_router(pomodoro_routes.router, prefix='/api/pomodoro')
    app.include_router(stats_routes.router, prefix='/api')

    return app


app = create_app()
