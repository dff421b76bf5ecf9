from abc import abstractmethod

from starlette.responses import JSONResponse

from gas_price_resolver.utils.logger import LogArgs


class UserMistakes:
    code = 400
    error_owner = 'user'


class OurMistakes:
    code = 417
    error_owner = 'gas_price_resolver'


class ProviderMistakes:
    code = 409
    error_owner = 'provider'


class BaseGasPriceError(Exception):
    """common error for gas price resolution"""

    @property
    @abstractmethod
    def msg_to_log(self):
        ...

    @property
    @abstractmethod
    def code(self):
        ...

    @property
    @abstractmethod
    def error_owner(self):
        ...

    def __init__(self, source: str, message: str = None, **kwargs):
        super().__init__(source, message)
        self.source = source
        self.message = message
        self.kwargs = kwargs

    def __str__(self):
        return f'{self.msg_to_log}. Source: {self.source}'

    def __repr__(self):
        return f'{self.__class__.__name__}({self.source}, {self.message}, {self.kwargs})'

    def to_dict(self):
        return {
            'source': self.source,
            'reason': self.message,
            'error_owner': self.error_owner,
            **self.kwargs,
        }

    def to_log_args(self):
        return (
            f'{self.msg_to_log.lower()}. Source: %({LogArgs.gas_source})s, reason: %({LogArgs.ex})s',
            {LogArgs.gas_source: self.source, LogArgs.ex: self.message},
        )

    def to_http_exception(self) -> JSONResponse:
        return JSONResponse({
            'error': str(self),
            'reason': self.message,
            'source': self.source,
        }, status_code=self.code)


class UpstreamError(ProviderMistakes, BaseGasPriceError):
    """Gas oracle is unreachable, answers with an error or without a usable body"""
    msg_to_log = 'Failed to fetch gas prices'


class MalformedResponseError(OurMistakes, BaseGasPriceError):
    """Gas oracle response misses a required field, or we parse it wrong"""
    msg_to_log = 'Cannot parse gas oracle response'


class InvalidTierError(UserMistakes, BaseGasPriceError):
    """Requested speed is not one of the known gas speeds"""
    msg_to_log = 'Unknown gas speed'


responses = {
    UserMistakes.code: {'description': InvalidTierError.msg_to_log},
    ProviderMistakes.code: {'description': UpstreamError.msg_to_log},
    OurMistakes.code: {'description': MalformedResponseError.msg_to_log},
}
