import aiohttp
import fastapi
from pydantic import BaseModel, ConfigDict

from gas_price_resolver.clients.apm_client import ApmClient
from gas_price_resolver.config import Config
from gas_price_resolver.services.gas_service import GasService


class Dependencies(BaseModel):
    """
    Holds the dependencies that should exist for the lifetime of the application.
    """

    aiohttp_session: aiohttp.ClientSession
    config: Config
    apm_client: ApmClient
    gas_service: GasService

    model_config = ConfigDict(arbitrary_types_allowed=True, extra='forbid', frozen=True)

    def register(self, app: fastapi.FastAPI):
        """
        Registers itself in the application.
        """
        app.state.dependencies = self


def _get(request: fastapi.Request) -> Dependencies:
    return request.app.state.dependencies


def config(request: fastapi.Request) -> Config:
    return _get(request).config


def gas_service(request: fastapi.Request) -> GasService:
    return _get(request).gas_service
