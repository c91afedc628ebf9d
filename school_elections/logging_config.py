# school_elections/logging_config.py

from logging.config import dictConfig


def configure_logging(level='INFO'):
    """Route app and library loggers to stderr with one format."""
    dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': {
                'format': '%(asctime)s | %(levelname)-7s | %(name)s | %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'stream': 'ext://sys.stderr',
                'formatter': 'default',
            },
        },
        'root': {
            'level': level,
            'handlers': ['console'],
        },
        'loggers': {
            # SQL echo is too chatty outside debugging
            'sqlalchemy.engine': {'level': 'WARNING'},
        },
    })
