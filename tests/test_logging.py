import logging

from csrgen.utils.logging import get_logger


def test_component_loggers_share_root_handler():
    root = get_logger()
    child = get_logger("openssl")
    assert root.name == "csrgen"
    assert child.name == "csrgen.openssl"
    assert child.handlers == []
    assert child.propagate
    assert len(root.handlers) == 1
    # repeated calls do not stack handlers
    get_logger()
    assert len(logging.getLogger("csrgen").handlers) == 1


def test_log_line_format():
    handler = get_logger().handlers[0]
    record = logging.LogRecord("csrgen.openssl", logging.ERROR, __file__, 1, "boom", None, None)
    line = handler.formatter.format(record)
    assert line.startswith("[")
    assert line.endswith("] ERROR boom")
