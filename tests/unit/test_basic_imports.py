"""
Basic import tests to verify module structure
"""


def test_basic_imports():
    """Test basic module imports"""
    from utils.config_manager import UnifiedConfigManager
    from utils.logging_manager import LoggingManager

    from database.connection import DatabaseManager
    from database.models import Base, Quote, QuoteDB
    from database.operations import DatabaseOperations

    from data_sources.awesomeapi_source import AwesomeAPISource
    from data_sources import quote_source

    from api.app import app

    from client import QuoteClient

    from main import QuoteSystem, create_parser

    assert isinstance(quote_source, AwesomeAPISource)


def test_module_loggers_are_named():
    from utils import api_logger, db_logger, ds_logger, client_logger

    assert api_logger.name == "API"
    assert db_logger.name == "Database"
    assert ds_logger.name == "DataSource"
    assert client_logger.name == "Client"


def test_metrics_logger_counts():
    from utils.logging_manager import MetricsLogger, logging_manager

    metrics = MetricsLogger("ImportTest")
    metrics.increment("hits")
    metrics.increment("hits", 2)

    assert metrics.get_metrics()["ImportTest.hits"]["sum"] == 3
    assert logging_manager.get_metrics()["ImportTest.hits"] == 3


def test_api_app():
    """Test API app creation"""
    from api.app import app

    assert app.title == "Quote Relay API"
    paths = {route.path for route in app.routes}
    assert {"/", "/health", "/cotacao"} <= paths


def test_cli_parser():
    from main import create_parser

    parser = create_parser()
    args = parser.parse_args(["server", "--port", "9000"])
    assert args.command == "server"
    assert args.port == 9000
    assert args.host is None

    args = parser.parse_args(["client", "--timeout", "0.5"])
    assert args.timeout == 0.5
    assert args.url is None
