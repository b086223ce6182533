import pytest
from structlog.testing import capture_logs

from registrar.errors import ConfigurationError
from registrar.loaders import Loader
from registrar.validation import (
    check_tagged_classes,
    has_zero_arg_constructor,
    verify_default_loaders,
)


class CustomLoader(Loader):
    def register_class(self, type_ref):
        return None


def test_zero_arg_constructor_detection():
    class Plain:
        pass

    class Defaults:
        def __init__(self, size=1, *args, **kwargs):
            pass

    class TwoArgs:
        def __init__(self, a, b):
            pass

    class KeywordOnly:
        def __init__(self, *, name):
            pass

    assert has_zero_arg_constructor(Plain)
    assert has_zero_arg_constructor(Defaults)
    assert not has_zero_arg_constructor(TwoArgs)
    assert not has_zero_arg_constructor(KeywordOnly)


def test_valid_default_loader_components_pass(table, scanner, scope):
    @table.loader_info()
    class Widget:
        pass

    verify_default_loaders(scanner, table, scope)


def test_default_loader_offenders_are_all_named(table, scanner, scope):
    @table.loader_info()
    class Gadget:
        def __init__(self, a, b):
            pass

    @table.loader_info()
    class Doohickey:
        def __init__(self, a):
            pass

    @table.loader_info()
    class Widget:
        pass

    @table.loader_info(loader=CustomLoader)
    class Gizmo:
        def __init__(self, a):
            pass

    with capture_logs() as logs, pytest.raises(ConfigurationError) as exc_info:
        verify_default_loaders(scanner, table, scope)

    assert [t.target for t in exc_info.value.offenders] == [Doohickey, Gadget]
    assert "Found 2 classes" in exc_info.value.message
    assert "Gadget" in exc_info.value.message and "Doohickey" in exc_info.value.message
    assert logs[0]["log_level"] == "error"
    assert logs[0]["count"] == 2


def test_single_offender_message(table, scanner, scope):
    @table.loader_info()
    class Gadget:
        def __init__(self, a, b):
            pass

    with pytest.raises(ConfigurationError, match="Found 1 class missing"):
        verify_default_loaders(scanner, table, scope)


def test_blank_tags_produce_one_warning(table, scanner, scope):
    @table.register_tag("")
    class Tool:
        pass

    @table.register_tag(" ")
    class Spanner:
        pass

    @table.register_tag("widgets")
    class Widget:
        pass

    with capture_logs() as logs:
        untagged = check_tagged_classes(scanner, table, scope)

    assert [t.target for t in untagged] == [Spanner, Tool]
    assert len(logs) == 1
    assert logs[0]["log_level"] == "warning"
    assert logs[0]["event"] == "components_without_tag"
    assert len(logs[0]["components"]) == 2


def test_no_warning_without_blank_tags(table, scanner, scope):
    @table.register_tag("widgets")
    class Widget:
        pass

    with capture_logs() as logs:
        assert check_tagged_classes(scanner, table, scope) == []

    assert logs == []
