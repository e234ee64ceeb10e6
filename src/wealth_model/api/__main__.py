"""
Entry point for running the API as a module: python -m wealth_model.api
"""
from ..logging_config import configure_logging
from .app import create_app
from .config import ServiceConfig


def main() -> None:
    configure_logging()
    config = ServiceConfig.from_env()
    app = create_app(config)
    app.run(host=config.host, port=config.port, debug=False)


if __name__ == '__main__':
    main()
