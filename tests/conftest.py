import logging

import pytest
import structlog

from registrar.config import OnStartPolicy
from registrar.descriptors import DescriptorTable
from registrar.registrar import Registrar
from registrar.scanner import TableScanner


@pytest.fixture
def table() -> DescriptorTable:
    return DescriptorTable()


@pytest.fixture
def scanner(table) -> TableScanner:
    return TableScanner(table, import_modules=False)


@pytest.fixture
def scope(request) -> str:
    return request.module.__name__


@pytest.fixture
def new_registrar(scanner, table, scope):
    def make(policy: OnStartPolicy = OnStartPolicy.BOTH) -> Registrar:
        return Registrar(scanner, table, scope, policy).initialize()

    return make


@pytest.fixture
def restore_logging():
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield
    structlog.reset_defaults()
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)

