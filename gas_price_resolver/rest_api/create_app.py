from contextlib import asynccontextmanager

import aiohttp
import pydantic
from elasticapm.contrib.starlette import ElasticAPM
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gas_price_resolver.clients.apm_client import ApmClient
from gas_price_resolver.config import Config
from gas_price_resolver.rest_api import dependencies
from gas_price_resolver.rest_api.middlewares import RouteLoggerMiddleware
from gas_price_resolver.rest_api.routes.gas import gas_routes
from gas_price_resolver.utils.errors import BaseGasPriceError
from gas_price_resolver.utils.logger import get_logger

logger = get_logger(__name__)


def create_app(config: Config):
    apm_client = ApmClient(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Setup and register dependencies, the session needs a running loop.
        aiohttp_session = aiohttp.ClientSession(trust_env=True)
        gas_service = dependencies.GasService(
            config=config,
            apm_client=apm_client,
            session=aiohttp_session,
        )
        deps = dependencies.Dependencies(
            aiohttp_session=aiohttp_session,
            config=config,
            apm_client=apm_client,
            gas_service=gas_service,
        )
        deps.register(app)
        yield
        await aiohttp_session.close()

    app = FastAPI(
        title='Gas Price Resolver API',
        description=(
            """Resolves a recommended gas price from the explorer gas oracle.
            Prices are reported per speed tier (safe low, standard, fast),
            the resolved price is the tier's max fee rounded up to whole gwei and returned in wei."""
        ),
        version=config.VERSION,
        docs_url='/',
        redoc_url='/docs',
        lifespan=lifespan,
    )

    register_cors(app, config)
    register_route(app)
    register_route_logging(app)
    if config.APM_ENABLED:
        register_elastic_apm(app, apm_client)

    # Common RFC 5741 Exceptions handling, https://tools.ietf.org/html/rfc5741#section-2
    @app.exception_handler(Exception)
    async def http_exception_handler(request: Request, exc):
        exception_dict = {
            "type": "Internal Server Error",
            "title": exc.__class__.__name__,
            "instance": f"{config.SERVER_HOST}{request.url.path}",
            "detail": f"{exc.__class__.__name__} at {str(exc)} when executing {request.method} request",
        }
        logger.error(
            "Exception when %s: %s",
            exception_dict["instance"],
            exception_dict["detail"],
        )
        return JSONResponse(exception_dict, status_code=500)

    @app.exception_handler(pydantic.ValidationError)
    async def handle_validation_error(
        request: Request, exc: pydantic.ValidationError
    ):  # pylint: disable=unused-argument
        """
        Handles validation errors.
        """
        return JSONResponse({"message": exc.errors(include_url=False)}, status_code=422)

    @app.exception_handler(BaseGasPriceError)
    async def handle_gas_price_error(request: Request, exc: BaseGasPriceError):
        return exc.to_http_exception()

    @app.get("/health_check", include_in_schema=False)
    def health_check():
        """
        Health check
        ---
        tags:
            - util
        responses:
            200:
                description: Returns "OK"
        """
        return Response("OK")

    return app


def register_cors(app: FastAPI, config: Config):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_CREDENTIALS,
        allow_methods=config.CORS_METHODS,
        allow_headers=config.CORS_HEADERS,
    )


def register_route_logging(app: FastAPI):
    app.add_middleware(RouteLoggerMiddleware, skip_routes=['/health_check'])


def register_elastic_apm(app: FastAPI, apm_client: ApmClient):
    app.add_middleware(ElasticAPM, client=apm_client.client)


def register_route(app: FastAPI):
    app.include_router(gas_routes, prefix='/v1/gas', tags=['Gas'])
