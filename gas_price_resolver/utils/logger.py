from contextvars import ContextVar
from logging import LoggerAdapter, getLogger
from logging.config import dictConfig
from typing import Optional
from uuid import uuid4

from gas_price_resolver.config import config

CORRELATION_ID = "cid"
SESSION_ID = "sid"
ERR = "err"  # error object log argument
ERR_TYPE = "err_type"  # error type log argument

# This field is keyword argument of `logging.Logger._log` and never changed.
EXTRA = "extra"

HANDLERS = {
    'console': {
        'class': 'logging.StreamHandler',
        'level': config.LOGGING_LEVEL,
        'formatter': 'simple',
        'stream': 'ext://sys.stdout'
    },
    'logstash': {
        'level': config.LOGSTASH_LOGGING_LEVEL,
        'class': 'logstash_async.handler.AsynchronousLogstashHandler',
        'transport': 'logstash_async.transport.TcpTransport',
        'formatter': 'logstash',
        'host': config.LOGSTASH,
        'port': config.PORT,
        'database_path': None,
        'event_ttl': 30  # sec
    },
}

FORMATTERS = {
    'simple': {
        'format': '%(asctime)s - %(filename)s:%(lineno)s:%(funcName)s - %(levelname)s - %(message)s'
    },
    'logstash': {
        '()': 'logstash_formatter.LogstashFormatterV1'
    },
}

# Only configured handlers and their formatters are instantiated, logstash packages are an optional extra.
_handlers = {name: handler for name, handler in HANDLERS.items() if name in config.LOG_HANDLERS}

CONFIG = dict(
    # Same meaning as `disable_existing_loggers` of `logging.config.fileConfig`.
    disable_existing_loggers=False,
    version=1,
    formatters={handler['formatter']: FORMATTERS[handler['formatter']] for handler in _handlers.values()},
    handlers=_handlers,
    root={
        'handlers': config.LOG_HANDLERS,
        'level': config.LOGGING_LEVEL,
    },
)

correlation_id = ContextVar(CORRELATION_ID, default=uuid4().hex)
session_id = ContextVar(SESSION_ID, default=None)


class CustomContextLogger(LoggerAdapter):

    def process(self, msg, kwargs):
        if EXTRA not in kwargs:
            kwargs[EXTRA] = dict(self.extra)
        else:
            kwargs[EXTRA].update(self.extra)

        # assigning a request correlation key to all log messages
        kwargs[EXTRA][CORRELATION_ID] = self.get_correlation_id()

        sid = kwargs[EXTRA].get(SESSION_ID, self.get_session_id())
        if sid:
            # assigning a user session correlation key to all log messages
            kwargs[EXTRA][SESSION_ID] = sid

        if ERR in kwargs[EXTRA] and ERR_TYPE not in kwargs[EXTRA]:
            kwargs[EXTRA][ERR_TYPE] = type(kwargs[EXTRA][ERR]).__name__

        return msg, kwargs

    @staticmethod
    def get_correlation_id():
        return correlation_id.get()

    @staticmethod
    def get_session_id():
        return session_id.get()


class LogArgs:
    gas_source = "gas_source"  # upstream gas oracle name
    speed = "speed"  # requested speed tier
    block_number = "block_number"
    gas_price = "gas_price"  # resolved gas price in base units
    url = "url"
    ex = "ex"  # human readable exception description


def get_logger(name: str, extra: Optional[dict] = None, corr_id: Optional[str] = None) -> "CustomContextLogger":
    dictConfig(CONFIG)

    extra = extra or {}

    if corr_id:
        correlation_id.set(corr_id)

    return CustomContextLogger(getLogger(name), extra)


def set_correlation_id(corr_id: str):
    correlation_id.set(corr_id)


def set_session_id(sid: str):
    session_id.set(sid)
