from .logging import configure_logger, init_loggers, CustomJsonFormatter, OTLPJsonFormatter
